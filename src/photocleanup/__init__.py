"""
photo-cleanup: removes byte-identical duplicate files and organizes photos by date.

Core features:
- Exact duplicate detection by chunked, memory-bounded byte comparison (no hashing)
- Deterministic keeper choice: "photo.jpg" is kept over "photo-1.jpg"
- Dry-run mode and optional deletion to system trash (via send2trash)
- Photo organizing into yyyy/mm folders using EXIF dates (via Pillow)
"""

# Get version
try:
    from importlib.metadata import version as _version, PackageNotFoundError
    __version__ = _version("photo-cleanup")
except PackageNotFoundError:
    __version__ = "unknown"

# Public API: only what users should import directly
from photocleanup.commands import DedupeCommand, OrganizeCommand
from photocleanup.core import (
    DedupeParams, ScanParams, OrganizeParams, File, SizeGroup, MatchResult, ChunkComparer)
from photocleanup.utils.convert_utils import ConvertUtils
from photocleanup.services import DedupeService, FileService

__all__ = [
    "DedupeCommand",
    "OrganizeCommand",
    "DedupeParams",
    "ScanParams",
    "OrganizeParams",
    "File",
    "SizeGroup",
    "MatchResult",
    "ChunkComparer",
    "ConvertUtils",
    "DedupeService",
    "FileService",
    "__version__",
]
