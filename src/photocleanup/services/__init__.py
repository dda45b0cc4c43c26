"""File system access and duplicate removal services."""

from .file_service import FileService
from .dedupe_service import DedupeService

__all__ = ["FileService", "DedupeService"]
