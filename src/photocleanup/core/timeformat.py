"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/timeformat.py
Converts user friendly date patterns (yyyy/mm, dd-mmm-yy, ...) into strftime formats.
"""
import re

# Longer tokens first: the alternation is tried left to right at each position
_TOKENS = {
    "yyyy": "%Y",
    "yy": "%y",
    "mmmm": "%B",
    "mmm": "%b",
    "mm": "%m",
    "dddd": "%A",
    "ddd": "%a",
    "dd": "%d",
    "HHT": "%I",
    "HH": "%H",
    "MM": "%M",
    "SS": "%S",
    "ss": "%S",
    "tt": "%p",
    "ZZZ": "%Z",
    "Z": "%Z",
}
_TOKEN_RE = re.compile("|".join(re.escape(token) for token in _TOKENS) + "|%")


def time_format(pattern: str) -> str:
    """
    Returns a strftime format for a pattern written with yyyy, mm, dd, HH, MM, SS, ... tokens.
    Any other character is copied literally.

    >>> time_format("yyyy/mm")
    '%Y/%m'
    """
    return _TOKEN_RE.sub(lambda m: _TOKENS.get(m.group(0), "%%"), pattern)
