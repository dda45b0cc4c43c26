"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/memory.py
Estimates how much memory can be spent on comparison buffers without swapping.
"""

import logging
from typing import Optional, Tuple

import psutil

logger = logging.getLogger(__name__)

FALLBACK_AVAILABLE_MEMORY = 1 * 1024 * 1024 * 1024  # 1GB


def get_available_memory() -> Tuple[int, bool]:
    """
    Returns an estimation of how much memory is available to applications
    without swapping, and whether the fallback value had to be used.

    Never raises: when the platform gives no usable answer, the fixed
    FALLBACK_AVAILABLE_MEMORY is returned and a warning is logged.
    """
    try:
        available = int(psutil.virtual_memory().available)
    except Exception as e:
        logger.warning(f"Could not determine available memory, using fallback: {e}")
        return FALLBACK_AVAILABLE_MEMORY, True

    if available <= 0:
        logger.warning("Available memory reported as %d, using fallback", available)
        return FALLBACK_AVAILABLE_MEMORY, True

    logger.debug(f"Available memory: {available} bytes")
    return available, False


def usable_memory_budget(available: Optional[int] = None) -> int:
    """
    Returns 90% of the available memory, leaving headroom for the rest of the process.
    """
    if available is None:
        available, _ = get_available_memory()
    return (available * 9) // 10
