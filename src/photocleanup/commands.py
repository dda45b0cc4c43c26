"""
Command orchestrators shared by the CLI and library users.
Each command wires scanner, core engine and services together; no printing
happens here beyond what the services report through the Console.
"""
import logging
from typing import List, Optional, Callable

from photocleanup.core.comparer import ChunkComparer
from photocleanup.core.grouper import SizeGrouper
from photocleanup.core.interfaces import FileSystem
from photocleanup.core.memory import get_available_memory, usable_memory_budget
from photocleanup.core.models import DedupeParams, DedupeStats, OrganizeParams, PlannedMove, ScanParams
from photocleanup.core.organizer import Organizer
from photocleanup.core.scanner import FileScannerImpl
from photocleanup.services.dedupe_service import DedupeService
from photocleanup.services.file_service import FileService
from photocleanup.utils.console import Console

logger = logging.getLogger(__name__)


class DedupeCommand:
    """
    Orchestrates duplicate removal:
    1. Scan every input path
    2. Group files by size (stem-sorted per path)
    3. Size the read buffers from available memory
    4. Compare each size group and delete (or list) the duplicates

    Usage:
        command = DedupeCommand()
        stats = command.execute(["~/Pictures"], DedupeParams(dry_run=True))
    """

    def __init__(self, file_system: Optional[FileSystem] = None, console: Optional[Console] = None):
        self.file_system = file_system or FileService()
        self.console = console or Console()

    def resolve_memory_budget(self) -> int:
        available, used_fallback = get_available_memory()
        if used_fallback:
            self.console.info(f"Could not determine available memory, assuming {available} bytes.")
        return usable_memory_budget(available)

    def execute(
            self,
            paths: List[str],
            params: DedupeParams,
            scan_params: Optional[ScanParams] = None,
            memory_budget: Optional[int] = None,
            progress_callback: Optional[Callable[[str, int, Optional[int]], None]] = None,
            stopped_flag: Optional[Callable[[], bool]] = None
    ) -> DedupeStats:
        """
        Execute duplicate removal for the given paths.

        Raises:
            OSError: If scanning, reading or a non-tolerated deletion fails
            UnexpectedEndOfFileError: If a file changed size since it was scanned
            OperationCancelled: If stopped_flag requested cancellation
        """
        scanner = FileScannerImpl(scan_params or ScanParams(all_files=True))
        file_lists = [
            scanner.scan(path, stopped_flag=stopped_flag, progress_callback=progress_callback)
            for path in paths
        ]
        groups = SizeGrouper().group_paths(file_lists)

        if memory_budget is None:
            memory_budget = self.resolve_memory_budget()
        logger.debug(f"Memory budget for buffers: {memory_budget} bytes")

        comparer = ChunkComparer(self.file_system, params.chunk_size)
        service = DedupeService(self.file_system, params, self.console)
        return service.run(
            groups,
            comparer,
            memory_budget,
            stopped_flag=stopped_flag,
            progress_callback=progress_callback
        )


class OrganizeCommand:
    """
    Orchestrates photo organizing: scan source → evaluate destinations → move.
    """

    def __init__(self, file_system: Optional[FileSystem] = None, console: Optional[Console] = None):
        self.file_system = file_system or FileService()
        self.console = console or Console()

    def execute(
            self,
            src: str,
            dest: str,
            params: OrganizeParams,
            scan_params: Optional[ScanParams] = None,
            progress_callback: Optional[Callable[[str, int, Optional[int]], None]] = None,
            stopped_flag: Optional[Callable[[], bool]] = None
    ) -> List[PlannedMove]:
        scanner = FileScannerImpl(scan_params or ScanParams())
        files = scanner.scan(src, stopped_flag=stopped_flag, progress_callback=progress_callback)
        self.console.print(f"Found {len(files)} files.")

        organizer = Organizer(self.file_system, params, self.console)
        moves = organizer.evaluate(files, dest)
        organizer.execute(moves)
        return moves
