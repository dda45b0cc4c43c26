"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/comparer.py
Chunked, memory-bounded byte comparison of same-size files.

ALGORITHM
---------
Every file of a SizeGroup is opened up front and read in lockstep, one chunk
at a time. Every candidate leader starts at file 0. After each chunk, file i
keeps its candidate leader j = match_groups[i] only while j still leads its
own class and chunk i equals chunk j; otherwise the candidate advances towards i.
A file whose candidate reaches i becomes the leader of a new class.
Divergence is permanent, so scanning stops as soon as no two files match.

MEMORY
------
Each file owns one reusable buffer of chunk_size bytes. chunk_size is derived
from the memory budget and the number of files, so peak buffering stays near
the budget regardless of group or file size.
"""

from contextlib import ExitStack
from dataclasses import dataclass
from typing import BinaryIO, Callable, List, Optional
import logging

from photocleanup.core.errors import OperationCancelled, UnexpectedEndOfFileError
from photocleanup.core.interfaces import FileSystem
from photocleanup.core.models import DEFAULT_CHUNK_SIZE, File, MatchResult, SizeGroup

logger = logging.getLogger(__name__)

CHUNK_ALIGNMENT = 4096


def compute_chunk_size(file_count: int, memory_budget: int,
                       preferred_chunk_size: int = DEFAULT_CHUNK_SIZE) -> int:
    """
    Bytes to read from every file per step.

    The budget is split evenly between files and rounded down to 4K. When that
    leaves nothing, or more than the preferred size, the preferred size is used.
    """
    max_chunk_size = memory_budget // file_count if file_count > 0 else 0
    max_chunk_size -= max_chunk_size % CHUNK_ALIGNMENT
    if max_chunk_size <= 0 or max_chunk_size > preferred_chunk_size:
        return preferred_chunk_size
    return max_chunk_size


@dataclass
class _Stream:
    """Per-invocation read state of one file."""
    file: File
    handle: BinaryIO
    buffer: bytearray


class ChunkComparer:
    """
    Classifies the files of a SizeGroup into match groups by streaming comparison.
    All file access goes through the injected FileSystem.
    """

    def __init__(self, file_system: Optional[FileSystem] = None,
                 preferred_chunk_size: int = DEFAULT_CHUNK_SIZE):
        if file_system is None:
            from photocleanup.services.file_service import FileService
            file_system = FileService()
        self.file_system = file_system
        self.preferred_chunk_size = preferred_chunk_size

    def compare(
        self,
        group: SizeGroup,
        memory_budget: int,
        stopped_flag: Optional[Callable[[], bool]] = None,
        progress_callback: Optional[Callable[[str, int, object], None]] = None
    ) -> MatchResult:
        """
        Compares all files of the group and returns their final match groups.

        Raises:
            OSError: If any file cannot be opened or read.
            UnexpectedEndOfFileError: If a file is shorter than the group size.
            OperationCancelled: If stopped_flag returns True between chunks.
        """
        files = group.files
        # every file starts by following file 0 and only ever moves forward
        match_groups = [0] * len(files)
        chunk_size = compute_chunk_size(len(files), memory_budget, self.preferred_chunk_size)
        buffer_size = min(chunk_size, group.size)
        chunks_read = 0

        logger.debug(f"Comparing {len(files)} files of {group.size} bytes in {chunk_size} byte chunks")

        # ExitStack closes every opened handle on all exit paths, including a failed open
        with ExitStack() as stack:
            streams = []
            for file in files:
                handle = stack.enter_context(self.file_system.open(file.path))
                streams.append(_Stream(file=file, handle=handle, buffer=bytearray(buffer_size)))

            processed_size = 0
            while processed_size < group.size:
                if stopped_flag and stopped_flag():
                    logger.debug(f"Comparison of {group} cancelled at offset {processed_size}")
                    raise OperationCancelled(f"Cancelled while comparing files of {group.size} bytes")

                length = min(chunk_size, group.size - processed_size)
                chunks = [self._read_chunk(stream, length) for stream in streams]
                chunks_read += 1

                all_different = self._classify(chunks, match_groups)
                processed_size += length

                if progress_callback:
                    progress_callback("Comparing", processed_size, group.size)

                if all_different:
                    logger.debug(f"All files differ after {processed_size} bytes, stopping early")
                    break

        for index, file in enumerate(files):
            file.match_group = match_groups[index]

        return MatchResult(group=group, match_groups=match_groups, chunks_read=chunks_read)

    @staticmethod
    def _read_chunk(stream: _Stream, length: int) -> memoryview:
        """
        Fills the first `length` bytes of the stream's buffer.
        Partial reads are retried; end of file before `length` bytes is fatal.
        """
        view = memoryview(stream.buffer)[:length]
        filled = 0
        while filled < length:
            read = stream.handle.readinto(view[filled:])
            if not read:
                raise UnexpectedEndOfFileError(stream.file.path)
            filled += read
        return view

    @staticmethod
    def _classify(chunks: List[memoryview], match_groups: List[int]) -> bool:
        """
        Re-validates every file against its candidate leader for the current chunk.
        Returns True when every file leads its own class.
        """
        all_different = True
        for i, chunk in enumerate(chunks):
            j = match_groups[i]
            while j < i:
                # only a current leader may absorb i
                if match_groups[j] == j and chunk == chunks[j]:
                    all_different = False
                    break
                j += 1
            match_groups[i] = j
        return all_different
