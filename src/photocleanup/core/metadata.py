"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/metadata.py
Extracts the moment a photo was taken, from EXIF data or from the file name.
"""
import logging
import re
from datetime import datetime
from typing import BinaryIO, Optional, Union

from PIL import Image, ExifTags, UnidentifiedImageError

logger = logging.getLogger(__name__)

EXIF_TIME_FORMAT = "%Y:%m:%d %H:%M:%S"

# (pattern, strptime format) pairs for names written by phone cameras and sync clients
FILENAME_TIME_PATTERNS = [
    (re.compile(r"^(?i:IMG|VID)_(\d{8}_\d{6})\.(?i:jpg|jpeg|mp4)$"), "%Y%m%d_%H%M%S"),
    (re.compile(r"^(\d{4}-\d{2}-\d{2} \d{2}\.\d{2}\.\d{2})(?:-\d+)?\.(?i:jpg|jpeg|mp4)$"), "%Y-%m-%d %H.%M.%S"),
]


def read_exif_datetime(source: Union[str, BinaryIO]) -> Optional[datetime]:
    """
    Returns DateTimeOriginal from the EXIF sub-IFD, falling back to the
    primary DateTime tag. Returns None when the file has no usable EXIF date.
    """
    try:
        with Image.open(source) as img:
            exif = img.getexif()
    except (UnidentifiedImageError, OSError, ValueError) as e:
        logger.debug(f"Error reading meta data: {e}")
        return None

    raw = exif.get_ifd(ExifTags.IFD.Exif).get(ExifTags.Base.DateTimeOriginal)
    if not raw:
        raw = exif.get(ExifTags.Base.DateTime)
    if not raw:
        return None

    if isinstance(raw, bytes):
        raw = raw.decode("ascii", errors="replace")
    try:
        return datetime.strptime(raw.strip("\x00 "), EXIF_TIME_FORMAT)
    except ValueError:
        logger.debug(f"Malformed EXIF date: {raw!r}")
        return None


def parse_filename_datetime(name: str) -> Optional[datetime]:
    """
    Parses names like IMG_20180304_123456.jpg or '2018-03-04 12.34.56.mp4'.
    """
    for pattern, fmt in FILENAME_TIME_PATTERNS:
        match = pattern.match(name)
        if match:
            try:
                return datetime.strptime(match.group(1), fmt)
            except ValueError:
                return None
    return None
