# codeseek/index/scanner.py
"""
File scanner for project indexing.

Walks a project tree depth-first and returns the text files that survive
the ignore rules, the exclude patterns and the extension allow-list,
together with their decoded content.

Per-file problems (unreadable file, broken symlink, symlink escaping the
project) are logged and skipped. Only a bad root aborts a scan.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import FrozenSet, List, Optional, Set, Tuple

from codeseek.core.exceptions import PathNotFoundError, ReadError, RootNotADirectoryError
from codeseek.index.ignore import IgnoreSpec, load_ignore_spec, matches_exclude_pattern
from codeseek.logging.logger import get_logger
from codeseek.logging.tags import SCAN

logger = get_logger(__name__)

FALLBACK_ENCODINGS = ("utf-8", "gbk", "gb2312", "latin-1")

BINARY_SAMPLE_SIZE = 8192
BINARY_RATIO_THRESHOLD = 0.3
# NUL and C0 control bytes, minus tab, newline, vertical tab, form feed and carriage return
_BINARY_BYTES = frozenset(range(0x00, 0x09)) | frozenset(range(0x0E, 0x20))
REPLACEMENT_CHAR = "�"


@dataclass(frozen=True)
class ScanOptions:
    """Traversal settings."""

    max_depth: int = 30
    text_extensions: FrozenSet[str] = frozenset()
    exclude_patterns: Tuple[str, ...] = ()
    follow_symlinks: bool = False

    @classmethod
    def from_config(cls, config) -> "ScanOptions":
        return cls(
            max_depth=config.max_depth,
            text_extensions=frozenset(config.text_extensions),
            exclude_patterns=tuple(config.exclude_patterns),
            follow_symlinks=config.follow_symlinks,
        )


@dataclass(frozen=True)
class ScannedFile:
    """A text file accepted by the scanner."""

    rel_path: str  # Forward-slash path relative to the scan root
    abs_path: str
    content: str

    @property
    def ext(self) -> str:
        return Path(self.rel_path).suffix.lower()


@dataclass
class ScanResult:
    """Outcome of a scan."""

    root: str
    files: List[ScannedFile] = field(default_factory=list)
    errors: List[Tuple[str, str]] = field(default_factory=list)
    total_dirs: int = 0
    excluded_count: int = 0

    @property
    def total_scanned(self) -> int:
        return len(self.files)


def _too_many_replacements(text: str) -> bool:
    if not text:
        return False
    replaced = text.count(REPLACEMENT_CHAR)
    if len(text) < 100:
        return replaced > 5
    return replaced / len(text) > 0.05


def is_binary(data: bytes) -> bool:
    """True if the leading bytes hold a NUL or mostly control bytes."""
    sample = data[:BINARY_SAMPLE_SIZE]
    if not sample:
        return False
    if b"\x00" in sample:
        return True
    control = sum(1 for byte in sample if byte in _BINARY_BYTES)
    return control / len(sample) > BINARY_RATIO_THRESHOLD


def read_text_with_fallback(path: Path) -> str:
    """
    Read a file as text, trying several encodings.

    Bytes are decoded directly so line terminators survive untouched.

    Raises:
        ReadError: If the file cannot be read or looks binary.
    """
    try:
        data = path.read_bytes()
    except OSError as e:
        raise ReadError(str(path), str(e)) from e

    if is_binary(data):
        raise ReadError(str(path), "Cannot decode binary file as text")

    for encoding in FALLBACK_ENCODINGS:
        try:
            text = data.decode(encoding, errors="replace")
        except LookupError:
            continue
        if _too_many_replacements(text):
            continue
        if encoding != "utf-8":
            logger.debug(f"{SCAN} Read {path} with encoding: {encoding}")
        return text

    logger.warning(f"{SCAN} Read {path} with utf-8 (some characters may be lost)")
    return data.decode("utf-8", errors="replace")


class FileScanner:
    """
    Depth-first project walker.

    Usage:
        scanner = FileScanner(ScanOptions(text_extensions=frozenset({".py"})))
        result = scanner.scan("/path/to/project")
        for f in result.files:
            print(f.rel_path, len(f.content))
    """

    def __init__(self, options: Optional[ScanOptions] = None) -> None:
        self._options = options or ScanOptions()

    def scan(self, root: str | Path) -> ScanResult:
        """
        Collect text files under root.

        Raises:
            PathNotFoundError: root does not exist.
            RootNotADirectoryError: root is not a directory.
        """
        root_path = Path(root)
        if not root_path.exists():
            raise PathNotFoundError(
                f"Project root path does not exist: {root}. "
                "Please check if the path is correct and accessible."
            )
        if not root_path.is_dir():
            raise RootNotADirectoryError(f"Project root path is not a directory: {root}")

        root_path = root_path.resolve()
        ignore_spec = load_ignore_spec(root_path)

        result = ScanResult(root=str(root_path))
        visited: Set[str] = {os.path.realpath(root_path)}
        self._walk(root_path, root_path, 0, ignore_spec, result, visited)

        logger.info(
            f"{SCAN} Scan completed: {len(result.files)} files, {result.total_dirs} directories, "
            f"{result.excluded_count} excluded, {len(result.errors)} unreadable"
        )
        return result

    def _is_excluded(self, path: Path, rel_path: str, is_dir: bool, ignore_spec: IgnoreSpec) -> bool:
        if ignore_spec.is_ignored(path, is_dir):
            return True
        return matches_exclude_pattern(rel_path, self._options.exclude_patterns)

    def _walk(
        self,
        directory: Path,
        root: Path,
        depth: int,
        ignore_spec: IgnoreSpec,
        result: ScanResult,
        visited: Set[str],
    ) -> None:
        if depth > self._options.max_depth:
            logger.debug(f"{SCAN} Max depth {self._options.max_depth} reached at {directory}")
            return

        try:
            with os.scandir(directory) as it:
                entries = sorted(it, key=lambda e: e.name)
        except OSError as e:
            logger.warning(f"{SCAN} Cannot list directory {directory}: {e}")
            result.errors.append((str(directory), str(e)))
            return

        for entry in entries:
            full_path = Path(entry.path)
            rel_path = full_path.relative_to(root).as_posix()

            try:
                if entry.is_symlink():
                    if not self._options.follow_symlinks:
                        logger.debug(f"{SCAN} Skipping symlink: {rel_path}")
                        continue
                is_dir = entry.is_dir(follow_symlinks=True)
                is_file = entry.is_file(follow_symlinks=True)
            except OSError as e:
                logger.warning(f"{SCAN} Failed to resolve entry {rel_path}: {e}")
                continue

            if is_dir:
                result.total_dirs += 1
                if self._is_excluded(full_path, rel_path, True, ignore_spec):
                    result.excluded_count += 1
                    logger.debug(f"{SCAN} Excluded directory: {rel_path}")
                    continue

                real_dir = os.path.realpath(full_path)
                if real_dir in visited:
                    logger.debug(f"{SCAN} Skipping already visited directory: {rel_path}")
                    continue
                visited.add(real_dir)

                self._walk(full_path, root, depth + 1, ignore_spec, result, visited)

            elif is_file:
                if self._is_excluded(full_path, rel_path, False, ignore_spec):
                    result.excluded_count += 1
                    logger.debug(f"{SCAN} Excluded file: {rel_path}")
                    continue

                ext = full_path.suffix.lower()
                if self._options.text_extensions and ext not in self._options.text_extensions:
                    continue

                if not self._inside_root(full_path, root):
                    logger.warning(f"{SCAN} Skipping file outside project root: {full_path}")
                    continue

                try:
                    content = read_text_with_fallback(full_path)
                except ReadError as e:
                    logger.warning(f"{SCAN} Failed to read file: {full_path} - {e.reason}")
                    result.errors.append((str(full_path), e.reason))
                    continue

                result.files.append(
                    ScannedFile(rel_path=rel_path, abs_path=str(full_path), content=content)
                )
                logger.debug(f"{SCAN} Collected file: {rel_path}")

            else:
                logger.warning(f"{SCAN} Failed to resolve symlink: {rel_path}")

    @staticmethod
    def _inside_root(path: Path, root: Path) -> bool:
        real = os.path.realpath(path)
        real_root = os.path.realpath(root)
        try:
            return os.path.commonpath([real, real_root]) == real_root
        except ValueError:
            # different drives on Windows
            return False


__all__ = [
    "FALLBACK_ENCODINGS",
    "ScanOptions",
    "ScannedFile",
    "ScanResult",
    "FileScanner",
    "is_binary",
    "read_text_with_fallback",
]
