"""
Shared fixtures for photocleanup tests.
Provides a recording file system, a capturing console and a controlled duplicate tree.
"""
import io
import random
from pathlib import Path
from typing import Dict

import pytest

from fakes import FakeFileSystem
from photocleanup.utils.console import Console

SCENARIO_SIZE = 55513


@pytest.fixture
def fake_fs():
    return FakeFileSystem()


@pytest.fixture
def console():
    """Verbose console writing into in-memory buffers; read with console.out.getvalue()."""
    return Console(verbose=True, out=io.StringIO(), err=io.StringIO())


@pytest.fixture
def duplicate_tree(tmp_path) -> Dict[str, Path]:
    """
    Three files of 55513 bytes:
    - duplicate/duplicate.jpg and duplicate/duplicate-1.jpg are byte-identical
    - exif-20170202.jpg differs in a single byte
    """
    rng = random.Random(2018)
    content = bytes(rng.getrandbits(8) for _ in range(SCENARIO_SIZE))
    other = bytearray(content)
    other[SCENARIO_SIZE // 2] ^= 0xFF

    (tmp_path / "duplicate").mkdir()
    files = {
        "duplicate": tmp_path / "duplicate" / "duplicate.jpg",
        "duplicate-1": tmp_path / "duplicate" / "duplicate-1.jpg",
        "exif": tmp_path / "exif-20170202.jpg",
    }
    files["duplicate"].write_bytes(content)
    files["duplicate-1"].write_bytes(content)
    files["exif"].write_bytes(bytes(other))
    return files
