"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

services/file_service.py
Production implementation of the FileSystem capability.
Every read or mutation of user files goes through this class, so tests can swap it for a fake.
"""
import os
from pathlib import Path
from typing import BinaryIO
from send2trash import send2trash


class FileService:
    """
    Thin wrapper over the os module and send2trash.
    Errors propagate unchanged so callers can tell permission problems from other failures.
    """

    def open(self, path: str) -> BinaryIO:
        """Opens a file for binary reading."""
        return open(path, "rb")

    def remove(self, path: str) -> None:
        """Permanently deletes a file."""
        os.remove(path)

    def trash(self, path: str) -> None:
        """Moves a file to the system trash."""
        self.move_to_trash(path)

    def makedirs(self, path: str, mode: int = 0o777) -> None:
        """Creates a directory together with missing parents."""
        os.makedirs(path, mode=mode, exist_ok=True)

    def rename(self, old_path: str, new_path: str) -> None:
        """Moves a file, failing if the destination is on another device."""
        os.rename(old_path, new_path)

    def lstat(self, path: str) -> os.stat_result:
        """Stats a path without following symbolic links."""
        return os.lstat(path)

    @staticmethod
    def move_to_trash(file_path: str):
        """Moves a file to the system trash."""
        path = Path(file_path).resolve()

        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")

        try:
            send2trash(str(path))
        except PermissionError:
            raise
        except Exception as e:
            raise RuntimeError(f"Failed to move to trash: {e}") from e
