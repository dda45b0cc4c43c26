"""
Core engine: scanner, size grouper, chunk comparer, memory estimator and organizer.

This package contains the performance-critical foundation of photocleanup:
- FileScannerImpl: recursive directory traversal with the acceptance rules
- SizeGrouper: size grouping with a deterministic keeper preference
- ChunkComparer: memory-bounded, chunked byte comparison of same-size files
- get_available_memory / usable_memory_budget: buffer sizing input
- Organizer: date-based photo moves
- Models: File, SizeGroup, MatchResult and the parameter objects

All components take their file-system access as an injected dependency.
"""

from .errors import PhotoCleanupError, UnexpectedEndOfFileError, OperationCancelled
from .models import (
    File, SizeGroup, MatchResult, PlannedMove, DedupeStats,
    DedupeParams, ScanParams, OrganizeParams, DEFAULT_CHUNK_SIZE)
from .memory import get_available_memory, usable_memory_budget, FALLBACK_AVAILABLE_MEMORY
from .grouper import SizeGrouper
from .comparer import ChunkComparer, compute_chunk_size
from .scanner import FileScannerImpl
from .organizer import Organizer
from .timeformat import time_format

__all__ = [
    "PhotoCleanupError",
    "UnexpectedEndOfFileError",
    "OperationCancelled",
    "File",
    "SizeGroup",
    "MatchResult",
    "PlannedMove",
    "DedupeStats",
    "DedupeParams",
    "ScanParams",
    "OrganizeParams",
    "DEFAULT_CHUNK_SIZE",
    "get_available_memory",
    "usable_memory_budget",
    "FALLBACK_AVAILABLE_MEMORY",
    "SizeGrouper",
    "ChunkComparer",
    "compute_chunk_size",
    "FileScannerImpl",
    "Organizer",
    "time_format",
]
