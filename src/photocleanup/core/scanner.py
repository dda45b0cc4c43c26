"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/scanner.py
Collects candidate files below a directory.
Features:
- Walks directories in lexical order for reproducible results
- Accepts only regular, readable files (symbolic links are never followed)
- Applies hidden-file, extension and minimum-size filters
- Permission errors abort the scan unless explicitly tolerated
"""

import os
import stat
from typing import List, Optional, Callable, Tuple
import logging

from photocleanup.core.errors import OperationCancelled
from photocleanup.core.interfaces import FileScanner
from photocleanup.core.models import File, ScanParams

logger = logging.getLogger(__name__)


class FileScannerImpl(FileScanner):
    """
    Scans directories recursively and filters files according to ScanParams.

    Attributes:
        params: Acceptance rules (minimum size, extensions, hidden files)
        progress_interval: Number of accepted files between progress updates
    """

    def __init__(self, params: Optional[ScanParams] = None, progress_interval: int = 1000):
        self.params = params or ScanParams()
        self.progress_interval = progress_interval

    def accept_file(self, name: str, st: os.stat_result) -> Tuple[bool, str]:
        """
        Decide whether a file is a candidate.
        Returns (accepted, reason) where reason explains a rejection.
        """
        if not stat.S_ISREG(st.st_mode):
            return False, "not regular file"
        if st.st_mode & stat.S_IRUSR != stat.S_IRUSR:
            return False, "not readable file"
        if not self.params.hidden_files and name.startswith("."):
            return False, "hidden file"
        ext = os.path.splitext(name)[1].lower()
        if not self.params.all_files and ext not in self.params.extensions:
            return False, "not image file"
        if st.st_size < self.params.min_size:
            return False, "small file"
        return True, ""

    def scan(self,
             root_dir: str,
             stopped_flag: Optional[Callable[[], bool]] = None,
             progress_callback: Optional[Callable[[str, int, object], None]] = None) -> List[File]:
        """
        Returns accepted files below root_dir (or root_dir itself if it is a file).

        Raises:
            FileNotFoundError: If root_dir does not exist.
            PermissionError: If a directory cannot be listed and permission errors are not tolerated.
            OperationCancelled: If stopped_flag returns True.
        """
        logger.debug(f"Scanning: {root_dir}")
        found_files: List[File] = []

        # lstat raises FileNotFoundError for a missing root, which aborts the run
        root_stat = os.lstat(root_dir)
        if not stat.S_ISDIR(root_stat.st_mode):
            self._add(found_files, root_dir, root_stat)
            return found_files

        def on_error(error: OSError):
            if isinstance(error, PermissionError) and self.params.ignore_permission_denied:
                logger.warning(f"{error.filename}: skipping: {error}")
                return
            raise error

        for root, dirs, files in os.walk(root_dir, onerror=on_error):
            if stopped_flag and stopped_flag():
                logger.debug("Scan interrupted by user")
                raise OperationCancelled(f"Scan of {root_dir} cancelled")

            dirs.sort()
            for filename in sorted(files):
                path = os.path.join(root, filename)
                try:
                    st = os.lstat(path)
                except PermissionError as e:
                    if not self.params.ignore_permission_denied:
                        raise
                    logger.warning(f"{path}: error getting file info: {e}")
                    continue

                if self._add(found_files, path, st):
                    if progress_callback and len(found_files) % self.progress_interval == 0:
                        progress_callback("Scanning", len(found_files), None)

        if progress_callback:
            progress_callback("Scanning", len(found_files), len(found_files))

        logger.debug(f"Scan completed. Found {len(found_files)} matching files.")
        return found_files

    def _add(self, found_files: List[File], path: str, st: os.stat_result) -> bool:
        accepted, reason = self.accept_file(os.path.basename(path), st)
        if not accepted:
            logger.debug(f"{path}: skipping: {reason}")
            return False
        found_files.append(File(path=path, size=st.st_size, mtime=st.st_mtime))
        return True
