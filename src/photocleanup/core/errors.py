"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/errors.py
Exceptions raised by the core engine.
"""


class PhotoCleanupError(Exception):
    """Base class for all errors raised by photocleanup."""


class UnexpectedEndOfFileError(PhotoCleanupError):
    """A file returned fewer bytes than its recorded size (stale size metadata)."""

    def __init__(self, path: str):
        super().__init__(f"{path}: unexpected end of file")
        self.path = path


class OperationCancelled(PhotoCleanupError):
    """Raised when stopped_flag requests cancellation between chunks."""
