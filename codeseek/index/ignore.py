# codeseek/index/ignore.py
"""
Ignore rules for project scanning.

Two independent exclusion mechanisms, either one is enough to exclude:

1. A .gitignore-style rule file found by searching upward from the scan
   root. Its patterns are matched against paths relative to the directory
   that holds the file (the ignore root), which may be an ancestor of the
   scan root.
2. Configured exclude patterns (fnmatch globs) matched against every path
   segment and against the whole path relative to the scan root.
"""

from __future__ import annotations

import fnmatch
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional

import pathspec

from codeseek.logging.logger import get_logger
from codeseek.logging.tags import SCAN

logger = get_logger(__name__)

IGNORE_FILENAME = ".gitignore"

# Always ignored once a rule file is in effect
BUILTIN_IGNORES = (".git",)


@dataclass(frozen=True)
class IgnoreSpec:
    """
    Compiled ignore rules plus the directory they are relative to.

    Attributes:
        spec: Compiled rules, or None when no rule file was found.
        root: Directory patterns are relative to (the ignore root).
        source: Rule file the spec was compiled from, if any.
    """

    spec: Optional[pathspec.PathSpec]
    root: Path
    source: Optional[Path] = None

    @property
    def pattern_count(self) -> int:
        return len(self.spec.patterns) if self.spec is not None else 0

    def is_ignored(self, path: Path, is_dir: bool) -> bool:
        """
        Check an absolute path against the compiled rules.

        Directories get a trailing slash so directory-only rules ("build/")
        apply to them.
        """
        if self.spec is None:
            return False

        rel = os.path.relpath(path, self.root).replace("\\", "/")
        if rel == "." or rel.startswith("../") or rel == "..":
            return False

        test_path = f"{rel}/" if is_dir else rel
        if self.spec.match_file(test_path):
            logger.debug(f"{SCAN} Excluded by {IGNORE_FILENAME}: {test_path}")
            return True
        return False


def find_ignore_file(start: Path, filename: str = IGNORE_FILENAME) -> Optional[Path]:
    """Return the nearest rule file at or above start, or None."""
    current = start.resolve()
    while True:
        candidate = current / filename
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            return None
        current = parent


def load_ignore_spec(scan_root: Path, filename: str = IGNORE_FILENAME) -> IgnoreSpec:
    """
    Resolve the ignore rules in effect for scan_root.

    The nearest ancestor rule file wins. When none exists up to the
    filesystem root, an empty spec rooted at scan_root is returned.
    """
    scan_root = scan_root.resolve()
    rule_file = find_ignore_file(scan_root, filename)

    if rule_file is None:
        logger.info(f"{SCAN} No {filename} found in directory tree starting from: {scan_root}")
        return IgnoreSpec(spec=None, root=scan_root)

    try:
        lines = rule_file.read_text(encoding="utf-8", errors="replace").splitlines()
    except OSError as e:
        logger.warning(f"{SCAN} Failed to read {rule_file}: {e}")
        lines = []

    spec = pathspec.GitIgnoreSpec.from_lines([*BUILTIN_IGNORES, *lines])
    logger.info(f"{SCAN} Loaded {filename} from: {rule_file} (root: {rule_file.parent})")
    return IgnoreSpec(spec=spec, root=rule_file.parent, source=rule_file)


def matches_exclude_pattern(rel_path: str, patterns: Iterable[str]) -> bool:
    """
    True if any pattern matches a segment of rel_path or rel_path itself.

    Args:
        rel_path: Forward-slash path relative to the scan root.
        patterns: fnmatch-style globs ("node_modules", "*.pyc", "docs/*.md").
    """
    parts = rel_path.split("/")
    for pattern in patterns:
        for part in parts:
            if fnmatch.fnmatchcase(part, pattern):
                return True
        if fnmatch.fnmatchcase(rel_path, pattern):
            return True
    return False


__all__ = [
    "IGNORE_FILENAME",
    "BUILTIN_IGNORES",
    "IgnoreSpec",
    "find_ignore_file",
    "load_ignore_spec",
    "matches_exclude_pattern",
]
