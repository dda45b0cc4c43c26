"""
Test doubles shared across the suite.
FakeFileSystem satisfies the FileSystem protocol and records every mutation.
"""
import errno
import io
import os
from pathlib import Path
from typing import Dict, Optional

from PIL import Image, ExifTags


class RecordingStream(io.BytesIO):
    """BytesIO that records every readinto() request and can limit bytes per read."""

    def __init__(self, data: bytes, max_read: Optional[int] = None):
        super().__init__(data)
        self.max_read = max_read
        self.read_sizes = []

    def readinto(self, buffer):
        view = memoryview(buffer)
        self.read_sizes.append(len(view))
        if self.max_read is not None:
            view = view[:self.max_read]
        return super().readinto(view)


class FakeFileSystem:
    """
    Paths registered in `contents` are served from memory, anything else is
    opened from disk. Mutations are only recorded, never performed.
    """

    def __init__(self, contents: Optional[Dict[str, bytes]] = None, max_read: Optional[int] = None):
        self.contents = dict(contents or {})
        self.max_read = max_read
        self.streams: Dict[str, RecordingStream] = {}
        self.removed = []
        self.trashed = []
        self.made_dirs = []
        self.renamed = []
        self.remove_errors: Dict[str, Exception] = {}
        self.lstat_errors: Dict[str, Exception] = {}
        self.makedirs_error: Optional[Exception] = None
        self.rename_error: Optional[Exception] = None

    def open(self, path):
        if path in self.contents:
            stream = RecordingStream(self.contents[path], self.max_read)
            self.streams[path] = stream
            return stream
        return open(path, "rb")

    def remove(self, path):
        self.removed.append(path)
        if path in self.remove_errors:
            raise self.remove_errors[path]

    def trash(self, path):
        self.trashed.append(path)
        if path in self.remove_errors:
            raise self.remove_errors[path]

    def makedirs(self, path, mode=0o777):
        self.made_dirs.append((path, mode))
        if self.makedirs_error:
            raise self.makedirs_error

    def rename(self, old_path, new_path):
        self.renamed.append((old_path, new_path))
        if self.rename_error:
            raise self.rename_error

    def lstat(self, path):
        if path in self.lstat_errors:
            raise self.lstat_errors[path]
        return os.lstat(path)


def permission_error(path: str) -> PermissionError:
    return PermissionError(errno.EACCES, "Permission denied", path)


def make_jpeg(path: Path, taken: Optional[str] = None, color=(200, 30, 30)) -> Path:
    """Writes a small JPEG, optionally with an EXIF DateTime like '2017:02:02 10:00:00'."""
    img = Image.new("RGB", (16, 16), color)
    if taken is None:
        img.save(path, "JPEG")
    else:
        exif = Image.Exif()
        exif[ExifTags.Base.DateTime] = taken
        img.save(path, "JPEG", exif=exif.tobytes())
    return path
