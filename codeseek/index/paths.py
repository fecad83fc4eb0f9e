# codeseek/index/paths.py
"""
Project path normalization.

The normalized path is the project key in the persisted index, so every
spelling of the same directory must map to one string:

- Windows:            C:\\Users\\me\\proj   -> C:/Users/me/proj
- POSIX / WSL:        /home/me/proj/        -> /home/me/proj
- Windows -> WSL UNC: \\\\wsl$\\Ubuntu\\home\\me -> /home/me
- WSL mount on win32: /mnt/c/Users/me      -> C:/Users/me
"""

from __future__ import annotations

import os
import posixpath
import re
import sys

from codeseek.core.exceptions import InvalidPathError
from codeseek.logging.logger import get_logger
from codeseek.logging.tags import INDEX

logger = get_logger(__name__)

_WSL_UNC_PREFIXES = ("\\\\wsl$\\", "//wsl$/", "\\\\wsl.localhost\\", "//wsl.localhost/")
_WSL_MOUNT_RE = re.compile(r"^/mnt/([a-zA-Z])(?:/(.*))?$")
_DRIVE_ROOT_RE = re.compile(r"^[A-Za-z]:/$")


def _strip_trailing_slash(path: str) -> str:
    # keep "/" and "C:/" intact
    if len(path) > 1 and path.endswith("/") and not _DRIVE_ROOT_RE.match(path):
        return path[:-1]
    return path


def _collapse(path: str) -> str:
    """Collapse duplicate separators and dot segments of a slash path."""
    collapsed = posixpath.normpath(re.sub(r"/{2,}", "/", path))
    if re.match(r"^[A-Za-z]:$", collapsed):
        collapsed += "/"
    return collapsed


def normalize_project_path(path: str, platform: str | None = None) -> str:
    """
    Canonicalize a project root path.

    Args:
        path: Path as typed by the user or sent by a client.
        platform: Override for sys.platform (tests).

    Returns:
        Absolute, forward-slash path without a trailing separator.

    Raises:
        InvalidPathError: If the path is empty or not a string.
    """
    if not isinstance(path, str):
        raise InvalidPathError("Path cannot be null or undefined")

    trimmed = path.strip()
    if not trimmed:
        raise InvalidPathError("Path cannot be empty")

    platform = platform or sys.platform

    if trimmed.lower().startswith(_WSL_UNC_PREFIXES):
        parts = [p for p in trimmed.replace("\\", "/").split("/") if p]
        # parts: ["wsl$", "<distro>", ...inner path]
        if len(parts) < 3:
            logger.warning(f"{INDEX} Incomplete WSL UNC path: {path}, falling back to standard resolution")
            return _strip_trailing_slash(os.path.abspath(trimmed).replace("\\", "/"))
        wsl_path = _collapse("/" + "/".join(parts[2:]))
        logger.debug(f"{INDEX} Converted WSL UNC path: {path} -> {wsl_path}")
        return wsl_path

    if trimmed.startswith("/"):
        normalized = trimmed.replace("\\", "/")
        if platform == "win32":
            match = _WSL_MOUNT_RE.match(normalized)
            if match:
                drive = match.group(1).upper()
                rest = match.group(2) or ""
                windows_path = f"{drive}:/{rest}"
                logger.info(f"{INDEX} Converted WSL mount path to Windows: {trimmed} -> {windows_path}")
                return _strip_trailing_slash(_collapse(windows_path))
        return _strip_trailing_slash(_collapse(normalized))

    if re.match(r"^[A-Za-z]:[\\/]", trimmed):
        # Windows drive path; resolve without depending on the host OS
        normalized = trimmed.replace("\\", "/")
        normalized = normalized[0].upper() + normalized[1:]
        return _strip_trailing_slash(_collapse(normalized))

    try:
        resolved = os.path.abspath(trimmed)
    except (OSError, ValueError) as e:
        raise InvalidPathError(f"Cannot resolve path: {path}") from e

    return _strip_trailing_slash(resolved.replace("\\", "/"))


def is_valid_project_path(path: str) -> bool:
    """True when the path normalizes to an absolute form."""
    try:
        normalized = normalize_project_path(path)
    except InvalidPathError:
        return False
    return normalized.startswith("/") or bool(re.match(r"^[A-Za-z]:/", normalized))


__all__ = ["normalize_project_path", "is_valid_project_path"]
