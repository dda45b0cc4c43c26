"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/grouper.py
Partitions candidate files into SizeGroups and fixes the keeper preference inside each group.
"""

from typing import List, Dict, Iterable, Any, Callable
from collections import defaultdict
import logging

from photocleanup.core.models import File, SizeGroup

logger = logging.getLogger(__name__)


class SizeGrouper:
    """
    Groups files sharing an identical byte length.

    Files are sorted by stem before grouping, so "photo.jpg" is preferred over
    "photo-1.jpg" as the kept copy when both turn out to be identical.
    """

    @staticmethod
    def sort_by_stem(files: List[File]) -> List[File]:
        """Stable sort by file name without extension."""
        return sorted(files, key=lambda f: f.stem)

    def group_by_size(self, files: List[File]) -> Dict[int, SizeGroup]:
        """Groups a single file list by size. Single-file groups are kept (they are unique)."""
        return self.group_paths([files])

    def group_paths(self, file_lists: Iterable[List[File]]) -> Dict[int, SizeGroup]:
        """
        Groups files collected from several input paths.

        Each path's files are sorted by stem on their own; paths are then merged
        in the order given, so files of an earlier path precede files of a later one.
        """
        groups: Dict[int, SizeGroup] = {}
        for files in file_lists:
            for size, members in self._group_by(self.sort_by_stem(files), lambda f: f.size).items():
                group = groups.setdefault(size, SizeGroup(size=size))
                for file in members:
                    group.add_file(file)

        logger.debug(f"Built {len(groups)} size groups")
        return groups

    @staticmethod
    def _group_by(files: List[File], key_func: Callable[[File], Any]) -> Dict[Any, List[File]]:
        """
        Helper method to group files by any computed key, preserving input order.
        """
        groups = defaultdict(list)
        for file in files:
            groups[key_func(file)].append(file)
        return dict(groups)
