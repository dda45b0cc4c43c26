"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

interfaces.py

Defines core interfaces (Protocols) used throughout the system.
These protocols use structural typing via `typing.Protocol`, so production
implementations and in-memory test fakes need no common base class.

Key Components:
---------------
- FileSystem: Capability for every file-system access that reads or mutates files.
- FileScanner: Interface for scanning directories and returning candidate files.
- Comparer: Interface for classifying a SizeGroup into match groups.
"""

import os
from typing import Protocol, List, BinaryIO, Optional, Callable
from photocleanup.core.models import File, SizeGroup, MatchResult


class FileSystem(Protocol):
    """
    Encapsulates file-system operations used by the engine and the services.
    Injected into constructors so tests can substitute a recording fake.
    """
    def open(self, path: str) -> BinaryIO:
        """Open a file for binary reading."""
        ...

    def remove(self, path: str) -> None:
        """Permanently delete a file."""
        ...

    def trash(self, path: str) -> None:
        """Move a file to the system trash."""
        ...

    def makedirs(self, path: str, mode: int = 0o777) -> None:
        """Create a directory and all missing parents."""
        ...

    def rename(self, old_path: str, new_path: str) -> None:
        """Move a file to a new location."""
        ...

    def lstat(self, path: str) -> os.stat_result:
        """Stat a path without following symbolic links."""
        ...


class FileScanner(Protocol):
    """
    Interface for scanning file systems and collecting candidate files.
    """
    def scan(
        self,
        root_dir: str,
        stopped_flag: Optional[Callable[[], bool]] = None,
        progress_callback: Optional[Callable[[str, int, object], None]] = None
    ) -> List[File]:
        """
        Scan files below root_dir.

        Args:
            root_dir: Directory (or single file) to scan.
            stopped_flag: Function that returns True if operation should be canceled.
            progress_callback: Optional callback for reporting progress (stage, current, total).

        Returns:
            List of accepted files.
        """
        ...


class Comparer(Protocol):
    """
    Interface for the byte-equality engine.
    """
    def compare(
        self,
        group: SizeGroup,
        memory_budget: int,
        stopped_flag: Optional[Callable[[], bool]] = None,
        progress_callback: Optional[Callable[[str, int, object], None]] = None
    ) -> MatchResult:
        """
        Classify the files of one SizeGroup into leaders and followers.

        Args:
            group: Files sharing the same size, in keeper-preference order.
            memory_budget: Bytes available for read buffers across all files.
            stopped_flag: Optional function to check for cancellation between chunks.
            progress_callback: Optional callback for progress updates (stage, current, total).

        Returns:
            MatchResult with the final match group of every file.
        """
        ...
