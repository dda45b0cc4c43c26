"""
Tests for FileScannerImpl: file acceptance rules and directory traversal.
"""
import os
import stat
from types import SimpleNamespace
from unittest import mock

import pytest

from fakes import permission_error
from photocleanup.core import FileScannerImpl, ScanParams
from photocleanup.core.errors import OperationCancelled


def fake_stat(mode=stat.S_IFREG | 0o644, size=100):
    return SimpleNamespace(st_mode=mode, st_size=size)


class TestAcceptFile:
    """Acceptance rules, checked in order."""

    def test_accepts_regular_image(self):
        assert FileScannerImpl().accept_file("photo.jpg", fake_stat()) == (True, "")

    def test_extension_is_case_insensitive(self):
        accepted, _ = FileScannerImpl().accept_file("PHOTO.JPEG", fake_stat())
        assert accepted

    def test_rejects_directories_and_links(self):
        scanner = FileScannerImpl()
        assert scanner.accept_file("dir.jpg", fake_stat(stat.S_IFDIR | 0o755)) == (False, "not regular file")
        assert scanner.accept_file("link.jpg", fake_stat(stat.S_IFLNK | 0o777)) == (False, "not regular file")

    def test_rejects_unreadable(self):
        result = FileScannerImpl().accept_file("locked.jpg", fake_stat(stat.S_IFREG | 0o200))
        assert result == (False, "not readable file")

    def test_hidden_files(self):
        assert FileScannerImpl().accept_file(".secret.jpg", fake_stat()) == (False, "hidden file")
        accepted, _ = FileScannerImpl(ScanParams(hidden_files=True)).accept_file(".secret.jpg", fake_stat())
        assert accepted

    def test_non_images(self):
        assert FileScannerImpl().accept_file("notes.txt", fake_stat()) == (False, "not image file")
        accepted, _ = FileScannerImpl(ScanParams(all_files=True)).accept_file("notes.txt", fake_stat())
        assert accepted

    def test_custom_extensions_are_normalized(self):
        scanner = FileScannerImpl(ScanParams(extensions=("PNG", " .gif")))
        assert scanner.params.extensions == (".png", ".gif")
        assert scanner.accept_file("a.png", fake_stat())[0]
        assert not scanner.accept_file("a.jpg", fake_stat())[0]

    def test_small_files(self):
        scanner = FileScannerImpl(ScanParams(min_size=1000))
        assert scanner.accept_file("a.jpg", fake_stat(size=999)) == (False, "small file")
        assert scanner.accept_file("a.jpg", fake_stat(size=1000))[0]

    def test_negative_min_size_rejected(self):
        with pytest.raises(ValueError):
            ScanParams(min_size=-1)


class TestScan:
    """Directory traversal."""

    def test_walks_recursively_in_sorted_order(self, tmp_path):
        (tmp_path / "b").mkdir()
        (tmp_path / "a").mkdir()
        for rel in ["z.jpg", "b/2.jpg", "b/1.jpg", "a/x.jpg", "a/notes.txt"]:
            (tmp_path / rel).write_bytes(b"data")

        files = FileScannerImpl().scan(str(tmp_path))

        rel_paths = [os.path.relpath(f.path, tmp_path) for f in files]
        assert rel_paths == ["z.jpg", os.path.join("a", "x.jpg"),
                             os.path.join("b", "1.jpg"), os.path.join("b", "2.jpg")]
        assert all(f.size == 4 for f in files)

    def test_single_file_root(self, tmp_path):
        target = tmp_path / "one.jpg"
        target.write_bytes(b"abc")

        files = FileScannerImpl().scan(str(target))

        assert [f.path for f in files] == [str(target)]
        assert files[0].size == 3

    def test_missing_root_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            FileScannerImpl().scan(str(tmp_path / "missing"))

    @pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unsupported")
    def test_symlinks_are_not_followed(self, tmp_path):
        real = tmp_path / "real.jpg"
        real.write_bytes(b"abc")
        try:
            (tmp_path / "link.jpg").symlink_to(real)
        except OSError:
            pytest.skip("cannot create symlinks here")

        files = FileScannerImpl().scan(str(tmp_path))

        assert [f.name for f in files] == ["real.jpg"]

    def test_permission_error_aborts_by_default(self, tmp_path):
        def walk(top, onerror=None):
            onerror(permission_error(str(tmp_path / "private")))
            return iter([])

        with mock.patch("photocleanup.core.scanner.os.walk", side_effect=walk):
            with pytest.raises(PermissionError):
                FileScannerImpl().scan(str(tmp_path))

    def test_permission_error_tolerated(self, tmp_path):
        (tmp_path / "ok.jpg").write_bytes(b"abc")

        def walk(top, onerror=None):
            onerror(permission_error(str(tmp_path / "private")))
            return iter([(str(tmp_path), [], ["ok.jpg"])])

        with mock.patch("photocleanup.core.scanner.os.walk", side_effect=walk):
            files = FileScannerImpl(ScanParams(ignore_permission_denied=True)).scan(str(tmp_path))

        assert [f.name for f in files] == ["ok.jpg"]

    def test_other_walk_errors_always_abort(self, tmp_path):
        def walk(top, onerror=None):
            onerror(OSError("I/O error"))
            return iter([])

        with mock.patch("photocleanup.core.scanner.os.walk", side_effect=walk):
            with pytest.raises(OSError, match="I/O error"):
                FileScannerImpl(ScanParams(ignore_permission_denied=True)).scan(str(tmp_path))

    def test_cancellation(self, tmp_path):
        (tmp_path / "a.jpg").write_bytes(b"abc")

        with pytest.raises(OperationCancelled):
            FileScannerImpl().scan(str(tmp_path), stopped_flag=lambda: True)

    def test_progress_reports_final_count(self, tmp_path):
        for name in ["a.jpg", "b.jpg", "c.jpg"]:
            (tmp_path / name).write_bytes(b"abc")
        calls = []

        FileScannerImpl(progress_interval=2).scan(
            str(tmp_path), progress_callback=lambda stage, current, total: calls.append((stage, current, total)))

        assert calls == [("Scanning", 2, None), ("Scanning", 3, 3)]
