"""
Tests for directory format patterns.
"""
from datetime import datetime

import pytest

from photocleanup.core.timeformat import time_format


@pytest.mark.parametrize("pattern, expected", [
    ("yyyy/mm", "%Y/%m"),
    ("yyyy/mm-mmm", "%Y/%m-%b"),
    ("yy/mmmm/dd", "%y/%B/%d"),
    ("dddd ddd", "%A %a"),
    ("HH.MM.SS", "%H.%M.%S"),
    ("HHT tt", "%I %p"),
    ("photos", "photos"),
])
def test_tokens(pattern, expected):
    assert time_format(pattern) == expected


def test_percent_is_literal():
    fmt = time_format("100%/yyyy")
    assert fmt == "100%%/%Y"
    assert datetime(2018, 3, 4).strftime(fmt) == "100%/2018"


def test_formats_directory_name():
    taken = datetime(2017, 2, 2, 10, 0, 0)
    assert taken.strftime(time_format("yyyy/mm")) == "2017/02"
    assert taken.strftime(time_format("yyyy/mm-dd")) == "2017/02-02"
