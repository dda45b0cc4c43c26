"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/models.py
Data models and configuration objects for duplicate removal and photo organizing.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional, Tuple
import os

DEFAULT_CHUNK_SIZE = 64 * 1024
DEFAULT_EXTENSIONS = (".jpg", ".jpeg")


# ======================
#  Core Data Models
# ======================

@dataclass
class File:
    """
    Represents a single candidate file on the file system.
    Size and modification time are captured once by the scanner.
    """
    path: str
    size: int  # in bytes
    mtime: float = 0.0
    name: Optional[str] = None
    extension: Optional[str] = None
    match_group: int = 0  # Set by the comparer, index into the enclosing SizeGroup

    def __post_init__(self):
        """Automatically extract basename and extension from path if not provided."""
        if self.name is None:
            self.name = os.path.basename(self.path)

        if self.extension is None:
            _, ext = os.path.splitext(self.name)
            self.extension = ext.lower()

    @property
    def stem(self) -> str:
        """File name without its extension, e.g. 'duplicate-1' for 'duplicate-1.jpg'."""
        return os.path.splitext(self.name)[0]

    def __repr__(self):
        return f"<File path={self.path}, size={self.size}>"


@dataclass
class SizeGroup:
    """
    All candidate files sharing an identical byte length.
    File order matters: earlier files are preferred as the kept copy.
    """
    size: int
    files: List[File] = field(default_factory=list)

    @property
    def file_count(self) -> int:
        return len(self.files)

    def add_file(self, file: File) -> None:
        if file.size != self.size:
            raise ValueError("Cannot add file with different size to a group.")
        self.files.append(file)

    def is_unique(self) -> bool:
        """True if the group holds a single file and needs no comparison."""
        return self.file_count < 2

    def __repr__(self):
        return f"<SizeGroup size={self.size}, count={len(self.files)}>"


@dataclass
class MatchResult:
    """
    Outcome of comparing one SizeGroup.

    match_groups[i] == i marks a leader (kept). Any other value is the index
    of the leader that file i is byte-identical to.
    """
    group: SizeGroup
    match_groups: List[int]
    chunks_read: int = 0

    def is_leader(self, index: int) -> bool:
        return self.match_groups[index] == index

    def leader_of(self, index: int) -> File:
        return self.group.files[self.match_groups[index]]

    @property
    def leaders(self) -> List[File]:
        return [f for i, f in enumerate(self.group.files) if self.is_leader(i)]

    @property
    def followers(self) -> List[File]:
        return [f for i, f in enumerate(self.group.files) if not self.is_leader(i)]

    def classes(self) -> List[Tuple[File, List[File]]]:
        """Equivalence classes as (leader, followers) pairs in leader order."""
        members = {i: [] for i in range(len(self.match_groups)) if self.is_leader(i)}
        for i, leader in enumerate(self.match_groups):
            if i != leader:
                members[leader].append(self.group.files[i])
        return [(self.group.files[i], dupes) for i, dupes in members.items()]


@dataclass
class PlannedMove:
    """A photo together with the destination computed for it by the organizer."""
    file: File
    time: Optional[datetime] = None
    new_dir: str = ""
    new_path: str = ""
    message: str = ""


@dataclass
class DedupeStats:
    """
    Counters collected while removing duplicates.
    """
    total_files: int = 0
    processed: int = 0
    kept: int = 0
    deleted: int = 0
    permission_denied: int = 0
    groups_compared: int = 0
    bytes_freed: int = 0
    total_time: float = 0.0

    def print_summary(self) -> str:
        from photocleanup.utils.convert_utils import ConvertUtils

        lines = [
            "Deduplication Statistics:",
            f"Total Execution Time: {self.total_time:.3f}s",
            f"Files: {self.processed} of {self.total_files} processed",
            f"Kept: {self.kept}",
            f"Removed: {self.deleted} ({ConvertUtils.format_size(self.bytes_freed)})",
            f"Size groups compared: {self.groups_compared}",
        ]
        if self.permission_denied:
            lines.append(f"Permission denied: {self.permission_denied}")
        return "\n".join(lines)


"""
DTOs for command parameters with built-in validation.
Interface-agnostic: built by the CLI, consumed by commands and services.
"""

@dataclass(frozen=True)
class DedupeParams:
    """Parameters for duplicate removal, passed explicitly into the engine."""
    chunk_size: int = DEFAULT_CHUNK_SIZE
    empty_files_are_identical: bool = False
    dry_run: bool = False
    ignore_permission_denied: bool = False
    use_trash: bool = False

    def __post_init__(self):
        if self.chunk_size <= 0:
            raise ValueError("Chunk size must be positive")


@dataclass(frozen=True)
class ScanParams:
    """Acceptance rules used by the scanner."""
    min_size: int = 0
    all_files: bool = False
    hidden_files: bool = False
    extensions: Tuple[str, ...] = DEFAULT_EXTENSIONS
    ignore_permission_denied: bool = False

    def __post_init__(self):
        if self.min_size < 0:
            raise ValueError("Minimum size cannot be negative")

        # Normalize extensions: ensure they start with dot and are lowercase
        normalized = []
        for ext in self.extensions:
            ext = ext.strip().lower()
            if ext and not ext.startswith('.'):
                ext = f".{ext}"
            if ext:
                normalized.append(ext)
        object.__setattr__(self, "extensions", tuple(normalized))


@dataclass(frozen=True)
class OrganizeParams:
    """Parameters for moving photos into a date-structured tree."""
    dir_format: str = "yyyy/mm"
    use_exif_time: bool = True
    use_file_time: bool = False
    use_filename_encoded_time: bool = True
    dry_run: bool = False
    rename_duplicates: bool = False

    def __post_init__(self):
        if not self.dir_format:
            raise ValueError("Directory format cannot be empty")
