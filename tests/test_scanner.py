# tests/test_scanner.py
"""
Tests for codeseek.index.scanner.
"""

import os
from pathlib import Path

import pytest

from codeseek.core.exceptions import PathNotFoundError, ReadError, RootNotADirectoryError
from codeseek.index.scanner import FileScanner, ScanOptions, is_binary, read_text_with_fallback

PY_ONLY = ScanOptions(text_extensions=frozenset({".py", ".ts", ".md"}))


def _write(path: Path, text: str = "x\n") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def _scan(root: Path, options: ScanOptions):
    return FileScanner(options).scan(root)


def _paths(result) -> list:
    return [f.rel_path for f in result.files]


class TestRootValidation:
    """Bad roots abort the scan."""

    def test_missing_root(self, tmp_path: Path):
        with pytest.raises(PathNotFoundError):
            FileScanner().scan(tmp_path / "nope")

    def test_root_is_a_file(self, tmp_path: Path):
        f = _write(tmp_path / "file.py")
        with pytest.raises(RootNotADirectoryError):
            FileScanner().scan(f)


class TestFileSelection:
    """Which files come back."""

    def test_relative_forward_slash_paths_with_content(self, tmp_path: Path):
        _write(tmp_path / "src" / "app.py", "print('hi')\n")

        result = _scan(tmp_path, PY_ONLY)

        assert _paths(result) == ["src/app.py"]
        assert result.files[0].content == "print('hi')\n"

    def test_extension_allow_list(self, tmp_path: Path):
        _write(tmp_path / "a.py")
        _write(tmp_path / "b.bin")
        _write(tmp_path / "C.MD")

        result = _scan(tmp_path, PY_ONLY)

        assert _paths(result) == ["C.MD", "a.py"]

    def test_empty_allow_list_accepts_everything(self, tmp_path: Path):
        _write(tmp_path / "a.py")
        _write(tmp_path / "b.anything")

        result = _scan(tmp_path, ScanOptions())

        assert _paths(result) == ["a.py", "b.anything"]

    def test_exclude_patterns_prune_directories(self, tmp_path: Path):
        _write(tmp_path / "node_modules" / "lib" / "index.ts")
        _write(tmp_path / "src" / "main.ts")
        _write(tmp_path / "src" / "main.pyc")

        options = ScanOptions(exclude_patterns=("node_modules", "*.pyc"))
        result = _scan(tmp_path, options)

        assert _paths(result) == ["src/main.ts"]
        assert result.excluded_count == 2

    def test_gitignore_in_root(self, tmp_path: Path):
        (tmp_path / ".gitignore").write_text("ignored/\n*.log\n")
        _write(tmp_path / "ignored" / "c.ts")
        _write(tmp_path / "a.ts")
        _write(tmp_path / "debug.log")

        result = _scan(tmp_path, PY_ONLY)

        assert _paths(result) == ["a.ts"]

    def test_gitignore_in_parent_applies_to_subdirectory_scan(self, tmp_path: Path):
        (tmp_path / ".gitignore").write_text("build/\n")
        sub = tmp_path / "sub"
        _write(sub / "build" / "out.ts")
        _write(sub / "src" / "in.ts")

        result = _scan(sub, PY_ONLY)

        assert _paths(result) == ["src/in.ts"]

    def test_order_is_deterministic(self, tmp_path: Path):
        for name in ["b.py", "a.py", "z/c.py", "m/d.py"]:
            _write(tmp_path / name)

        first = _paths(_scan(tmp_path, PY_ONLY))
        second = _paths(_scan(tmp_path, PY_ONLY))

        assert first == second
        assert sorted(first) == ["a.py", "b.py", "m/d.py", "z/c.py"]


class TestDepth:
    """Recursion bound."""

    def test_directories_beyond_max_depth_are_skipped(self, tmp_path: Path):
        _write(tmp_path / "top.py")
        _write(tmp_path / "d1" / "one.py")
        _write(tmp_path / "d1" / "d2" / "two.py")

        result = _scan(tmp_path, ScanOptions(max_depth=1))

        assert _paths(result) == ["d1/one.py", "top.py"]

    def test_zero_depth_scans_root_only(self, tmp_path: Path):
        _write(tmp_path / "top.py")
        _write(tmp_path / "d1" / "one.py")

        result = _scan(tmp_path, ScanOptions(max_depth=0))

        assert _paths(result) == ["top.py"]


@pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unavailable")
class TestSymlinks:
    """Links are skipped unless followed, and never escape the root."""

    def _link(self, target: Path, link: Path) -> None:
        try:
            link.symlink_to(target, target_is_directory=target.is_dir())
        except OSError:
            pytest.skip("cannot create symlinks here")

    def test_symlinks_skipped_by_default(self, tmp_path: Path):
        root = tmp_path / "root"
        _write(root / "real.py")
        self._link(root / "real.py", root / "alias.py")

        result = _scan(root, PY_ONLY)

        assert _paths(result) == ["real.py"]

    def test_followed_directory_link(self, tmp_path: Path):
        root = tmp_path / "root"
        _write(root / "pkg" / "mod.py")
        self._link(root / "pkg", root / "zlink")

        options = ScanOptions(text_extensions=frozenset({".py"}), follow_symlinks=True)
        result = _scan(root, options)

        # the real directory is walked first, so the link to it is a revisit
        assert _paths(result) == ["pkg/mod.py"]

    def test_followed_link_outside_root_is_rejected(self, tmp_path: Path):
        outside = _write(tmp_path / "outside" / "secret.py")
        root = tmp_path / "root"
        _write(root / "ok.py")
        self._link(outside, root / "escape.py")

        options = ScanOptions(text_extensions=frozenset({".py"}), follow_symlinks=True)
        result = _scan(root, options)

        assert _paths(result) == ["ok.py"]

    def test_broken_link_is_skipped(self, tmp_path: Path):
        root = tmp_path / "root"
        _write(root / "ok.py")
        self._link(root / "missing.py", root / "broken.py")

        options = ScanOptions(text_extensions=frozenset({".py"}), follow_symlinks=True)
        result = _scan(root, options)

        assert _paths(result) == ["ok.py"]


class TestReadTextWithFallback:
    """Decoding ladder."""

    def test_utf8(self, tmp_path: Path):
        f = tmp_path / "u.txt"
        f.write_bytes("héllo wörld\n".encode("utf-8"))

        assert read_text_with_fallback(f) == "héllo wörld\n"

    def test_line_terminators_preserved(self, tmp_path: Path):
        f = tmp_path / "crlf.txt"
        f.write_bytes(b"a\r\nb\rc\n")

        assert read_text_with_fallback(f) == "a\r\nb\rc\n"

    def test_gbk_fallback(self, tmp_path: Path):
        f = tmp_path / "gbk.txt"
        text = "中文注释，用于测试编码回退。" * 3
        f.write_bytes(text.encode("gbk"))

        assert read_text_with_fallback(f) == text

    def test_latin1_fallback(self, tmp_path: Path):
        f = tmp_path / "latin.txt"
        text = "café " * 30
        f.write_bytes(text.encode("latin-1"))

        assert read_text_with_fallback(f) == text

    def test_unreadable_raises_read_error(self, tmp_path: Path):
        with pytest.raises(ReadError):
            read_text_with_fallback(tmp_path / "missing.txt")

    def test_unreadable_file_is_skipped_by_scan(self, tmp_path: Path, monkeypatch):
        _write(tmp_path / "good.py")
        _write(tmp_path / "bad.py")

        import codeseek.index.scanner as scanner_module

        original = scanner_module.read_text_with_fallback

        def flaky(path: Path) -> str:
            if path.name == "bad.py":
                raise ReadError(str(path), "permission denied")
            return original(path)

        monkeypatch.setattr(scanner_module, "read_text_with_fallback", flaky)

        result = _scan(tmp_path, PY_ONLY)

        assert _paths(result) == ["good.py"]
        assert len(result.errors) == 1
        assert result.errors[0][1] == "permission denied"


class TestBinaryDetection:
    """Binary files never reach the chunker."""

    def test_nul_byte_is_binary(self):
        assert is_binary(b"abc\x00def")

    def test_mostly_control_bytes_is_binary(self):
        assert is_binary(b"\x01\x02\x03\x04a")

    def test_text_with_tabs_and_newlines_is_not_binary(self):
        assert not is_binary(b"\tindented\r\nline\n\x0c")
        assert not is_binary(b"")

    def test_binary_file_raises_read_error(self, tmp_path: Path):
        f = tmp_path / "img.png"
        f.write_bytes(bytes(range(256)) * 8)

        with pytest.raises(ReadError, match="binary"):
            read_text_with_fallback(f)

    def test_binary_file_skipped_with_empty_allow_list(self, tmp_path: Path):
        (tmp_path / "img.png").write_bytes(bytes(range(256)) * 8)
        _write(tmp_path / "main.py")

        result = _scan(tmp_path, ScanOptions())

        assert _paths(result) == ["main.py"]
        assert [Path(path).name for path, _ in result.errors] == ["img.png"]
