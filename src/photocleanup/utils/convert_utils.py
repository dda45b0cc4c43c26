"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

utils/convert_utils.py
Byte counts for the command line: parsing --chunk-size / --min-size and
formatting freed space in the summary. All units are binary (1K = 1024).
"""
import re

_SIZE_RE = re.compile(r"^(-?\d+(?:\.\d+)?)([KMGTP]?)(?:I?B)?$", re.IGNORECASE)

_MULTIPLIERS = {
    "": 1,
    "K": 1024,
    "M": 1024 ** 2,
    "G": 1024 ** 3,
    "T": 1024 ** 4,
    "P": 1024 ** 5,
}

_DISPLAY_UNITS = ("KiB", "MiB", "GiB", "TiB")


class ConvertUtils:
    @staticmethod
    def parse_size(text: str, minimum: int = 0) -> int:
        """
        Parses '65536', '64K', '64KB', '64KiB', '1.5M', ... into bytes.

        Raises ValueError for malformed input and for results below `minimum`;
        --chunk-size passes minimum=1 so a zero chunk is rejected while parsing.
        """
        match = _SIZE_RE.match(text.strip())
        if not match:
            raise ValueError(f"Invalid size '{text}' (expected e.g. 65536, 64K, 1.5M)")

        number, unit = match.groups()
        if number.startswith("-"):
            raise ValueError(f"Size cannot be negative: '{text}'")

        size = int(float(number) * _MULTIPLIERS[unit.upper()])
        if size < minimum:
            raise ValueError(f"Size must be at least {minimum} byte(s): '{text}'")
        return size

    @staticmethod
    def format_size(size: int) -> str:
        """'512 B', '54.21 KiB', '3.00 GiB'. Negative counts show as zero."""
        if size < 1024:
            return f"{max(size, 0)} B"

        value = float(size)
        for unit in _DISPLAY_UNITS:
            value /= 1024
            if value < 1024:
                break
        return f"{value:.2f} {unit}"
