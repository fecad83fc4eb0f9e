# codeseek/index/hashing.py
"""Content-addressed blob names."""

from __future__ import annotations

import hashlib


def compute_blob_name(path: str, content: str) -> str:
    """
    Derive the blob name for a (path, content) pair.

    SHA-256 over the UTF-8 path bytes followed by the UTF-8 content bytes,
    as lowercase hex. Nothing from the filesystem (mtime, mode) goes in,
    so the same blob gets the same name on every machine.
    """
    digest = hashlib.sha256()
    digest.update(path.encode("utf-8", errors="surrogateescape"))
    digest.update(content.encode("utf-8"))
    return digest.hexdigest()


__all__ = ["compute_blob_name"]
