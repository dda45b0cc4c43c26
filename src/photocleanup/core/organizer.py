"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/organizer.py
Moves photos into a date-structured destination tree (e.g. dest/2018/01/photo.jpg).

STAGES
------
evaluate : determine each photo's time and destination path, then drop every
           photo whose destination is already claimed by an older/larger one
execute  : check the destination, create directories and move (or only print
           the moves in dry-run mode)
"""
import logging
import os
from datetime import datetime
from typing import List, Optional

from photocleanup.core.interfaces import FileSystem
from photocleanup.core.metadata import read_exif_datetime, parse_filename_datetime
from photocleanup.core.models import File, OrganizeParams, PlannedMove
from photocleanup.core.timeformat import time_format
from photocleanup.utils.console import Console

logger = logging.getLogger(__name__)


class Organizer:
    """
    Plans and performs photo moves. All file access goes through the injected FileSystem.
    """

    def __init__(self, file_system: FileSystem, params: Optional[OrganizeParams] = None,
                 console: Optional[Console] = None):
        self.file_system = file_system
        self.params = params or OrganizeParams()
        self.console = console or Console()
        self.dir_format = time_format(self.params.dir_format)

    def determine_time(self, file: File) -> Optional[datetime]:
        """
        Time a photo was taken: EXIF first, then a time encoded in the file name,
        then (only if enabled) the file modification time.
        """
        if self.params.use_exif_time:
            try:
                with self.file_system.open(file.path) as stream:
                    taken = read_exif_datetime(stream)
            except OSError as e:
                logger.debug(f"{file.path}: error opening file ({e})")
                taken = None
            if taken is not None:
                return taken

        if self.params.use_filename_encoded_time:
            taken = parse_filename_datetime(file.name)
            if taken is not None:
                return taken

        if self.params.use_file_time:
            return datetime.fromtimestamp(file.mtime)

        return None

    def evaluate(self, files: List[File], dest: str) -> List[PlannedMove]:
        """Computes destinations for all files and marks destination clashes as duplicates."""
        file_count = len(files)
        moves = []

        for i, file in enumerate(files):
            self.console.progress(f"Evaluated {i} out of {file_count} files.")
            move = PlannedMove(file=file, time=self.determine_time(file))

            if move.time is None:
                move.message = f"{file.path}: could not determine date/time"
                self.console.print(move.message)
            else:
                move.new_dir = os.path.join(dest, move.time.strftime(self.dir_format))
                move.new_path = os.path.join(move.new_dir, file.name)
            moves.append(move)

        # older files first, then larger ones, so they claim the destination
        moves.sort(key=lambda m: (m.new_path, m.time or datetime.min, -m.file.size))
        self.mark_duplicates(moves)

        self.console.print(f"Evaluated {file_count} out of {file_count} files.")
        return moves

    def mark_duplicates(self, moves: List[PlannedMove]) -> None:
        """
        Moves must be sorted by new_path. Every move sharing a destination with
        the one before it is cancelled.
        """
        previous = None
        for move in moves:
            if previous is not None and move.new_path and move.new_path == previous.new_path:
                move.message = f"{move.file.path}: duplicate: {previous.new_path}"
                move.new_dir = ""
                move.new_path = ""
                self.console.print(move.message)
            else:
                previous = move

    def unique_path(self, path: str) -> str:
        """Appends -1, -2, ... to the file stem until the path does not exist."""
        stem, ext = os.path.splitext(path)
        counter = 1
        while True:
            candidate = f"{stem}-{counter}{ext}"
            try:
                self.file_system.lstat(candidate)
            except FileNotFoundError:
                return candidate
            counter += 1

    def execute(self, moves: List[PlannedMove]) -> None:
        """Moves files; problems are recorded in each move's message and never abort the run."""
        file_count = len(moves)

        for i, move in enumerate(moves):
            self.console.progress(f"Moved {i} out of {file_count} files.")

            if not move.new_path:
                continue

            # guard against overwriting
            try:
                dest = self.file_system.lstat(move.new_path)
            except FileNotFoundError:
                dest = None
            except OSError as e:
                move.message = f"{move.new_path}: problem checking destination: {e}"
                self.console.print(move.message)
                continue

            if dest is not None:
                if self._same_file(move.file.path, dest):
                    move.message = f"{move.new_path}: same file"
                    self.console.print(move.message)
                    continue
                if not self.params.rename_duplicates:
                    move.message = f"{move.new_path}: already exists"
                    self.console.print(move.message)
                    continue
                move.new_path = self.unique_path(move.new_path)

            if self.params.dry_run:
                move.message = f"mv {move.file.path} {move.new_path}"
                self.console.print(move.message)
                continue

            try:
                self.file_system.makedirs(move.new_dir, 0o777)
            except OSError as e:
                move.message = f"{move.new_dir}: failed to create directory: {e}"
                self.console.print(move.message)
                continue

            try:
                self.file_system.rename(move.file.path, move.new_path)
            except OSError as e:
                move.message = f"{move.new_path}: failed to copy: {e}"
                self.console.print(move.message)

        self.console.print(f"Moved {file_count} out of {file_count} files.")

    def _same_file(self, path: str, dest: os.stat_result) -> bool:
        try:
            return os.path.samestat(self.file_system.lstat(path), dest)
        except OSError:
            return False
