"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

services/dedupe_service.py
Turns comparison results into deletions (or a dry-run plan) and reports progress.
"""
import logging
import time
from typing import Callable, Dict, Optional

from photocleanup.core.interfaces import Comparer, FileSystem
from photocleanup.core.models import DedupeParams, DedupeStats, File, MatchResult, SizeGroup
from photocleanup.utils.console import Console

logger = logging.getLogger(__name__)


class DedupeService:
    """
    Deletes every follower of every match group and keeps the leaders.

    Deletion goes through the injected FileSystem. A PermissionError is downgraded
    to a message when params.ignore_permission_denied is set; every other error
    propagates and aborts the run.
    """

    def __init__(self, file_system: FileSystem, params: DedupeParams, console: Optional[Console] = None):
        self.file_system = file_system
        self.params = params
        self.console = console or Console()
        self.stats = DedupeStats()

    def delete_file(self, file: File) -> bool:
        """
        Deletes one duplicate. Returns False when a permission error was tolerated.
        """
        if self.params.dry_run:
            self.console.print(f'rm "{file.path}"')
            self.stats.deleted += 1
            self.stats.bytes_freed += file.size
            return True

        try:
            if self.params.use_trash:
                self.file_system.trash(file.path)
            else:
                self.file_system.remove(file.path)
        except PermissionError as e:
            if not self.params.ignore_permission_denied:
                raise
            logger.info(f"Permission denied deleting {file.path}: {e}")
            self.console.print(f"{file.path}: {e}")
            self.stats.permission_denied += 1
            return False

        logger.debug(f"Deleted duplicate: {file.path}")
        action = "trashed" if self.params.use_trash else "removed"
        self.console.info(f'{action} "{file.path}"')
        self.stats.deleted += 1
        self.stats.bytes_freed += file.size
        return True

    def report_kept(self, file: File) -> None:
        self.stats.kept += 1
        self.console.info(f'## "{file.path}"')

    def report_unique(self, group: SizeGroup) -> None:
        """A size seen only once cannot have duplicates."""
        for file in group.files:
            self.console.info("# Group:")
            self.report_kept(file)

    def process_empty_group(self, group: SizeGroup) -> None:
        """
        Zero-length files are identical by content, but unrelated empty files are
        only removed when params.empty_files_are_identical is set.
        """
        if not self.params.empty_files_are_identical:
            self.report_unique(group)
            return

        self.console.info(f"# Group: {group.file_count} files, {group.file_count - 1} removed")
        self.report_kept(group.files[0])
        for file in group.files[1:]:
            self.delete_file(file)

    def process_result(self, result: MatchResult) -> None:
        """Renders one block per equivalence class and deletes the followers."""
        for leader, followers in result.classes():
            if followers:
                self.console.info(f"# Group: {len(followers) + 1} files, {len(followers)} removed")
            else:
                self.console.info("# Group:")
            self.report_kept(leader)
            for file in followers:
                self.delete_file(file)

    def run(
        self,
        groups: Dict[int, SizeGroup],
        comparer: Comparer,
        memory_budget: int,
        stopped_flag: Optional[Callable[[], bool]] = None,
        progress_callback: Optional[Callable[[str, int, object], None]] = None
    ) -> DedupeStats:
        """
        Processes all size groups, smallest size first.

        Raises whatever the comparer or a non-tolerated deletion raises.
        """
        start_time = time.time()
        self.stats.total_files = sum(g.file_count for g in groups.values())

        for size in sorted(groups):
            group = groups[size]
            if group.is_unique():
                self.report_unique(group)
            elif size == 0:
                self.process_empty_group(group)
            else:
                result = comparer.compare(group, memory_budget, stopped_flag=stopped_flag)
                self.stats.groups_compared += 1
                self.process_result(result)

            self.stats.processed += group.file_count
            self.console.progress(f"Processed {self.stats.processed} of {self.stats.total_files} files.")
            if progress_callback:
                progress_callback("Deduplicating", self.stats.processed, self.stats.total_files)

        self.console.print(f"Processed {self.stats.processed} of {self.stats.total_files} files.")
        self.stats.total_time = time.time() - start_time
        return self.stats
