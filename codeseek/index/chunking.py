# codeseek/index/chunking.py
"""
Line-based chunking of file content into blobs.

A file that fits in the line budget becomes one blob carrying its own
relative path. Larger files are cut into contiguous line groups named
``<path>#chunk<i>of<n>`` (1-indexed). The ``#chunk`` suffix is reserved:
a real file whose name already ends that way would collide with a chunk
path, and that is not handled.

Line terminators (``\\n``, ``\\r\\n``, bare ``\\r``) stay attached to the
line they end, so joining the chunk contents gives back the file exactly.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import List

from codeseek.logging.logger import get_logger
from codeseek.logging.tags import CHUNKING

logger = get_logger(__name__)

_LINE_END = re.compile(r"\r\n|\r|\n")


@dataclass(frozen=True)
class Blob:
    """A whole file or one chunk of a file, as sent to the backend."""

    path: str
    content: str

    def to_payload(self) -> dict:
        return {"path": self.path, "content": self.content}


def split_lines(content: str) -> List[str]:
    """
    Split text into lines, keeping each terminator on its line.

    Only ``\\n``, ``\\r\\n`` and ``\\r`` count as terminators
    (``str.splitlines`` also breaks on form feeds and Unicode separators).
    """
    lines: List[str] = []
    start = 0
    for match in _LINE_END.finditer(content):
        lines.append(content[start : match.end()])
        start = match.end()
    if start < len(content):
        lines.append(content[start:])
    return lines


def chunk_path(path: str, index: int, total: int) -> str:
    return f"{path}#chunk{index}of{total}"


class LineChunker:
    """
    Splits file content into blobs of at most ``max_lines`` lines.

    Example:
        >>> chunker = LineChunker(max_lines=800)
        >>> [b.path for b in chunker.split("b.ts", "x\\n" * 1000)]
        ['b.ts#chunk1of2', 'b.ts#chunk2of2']
    """

    def __init__(self, max_lines: int = 800) -> None:
        if max_lines < 1:
            raise ValueError(f"max_lines must be >= 1, got {max_lines}")
        self.max_lines = max_lines

    def split(self, path: str, content: str) -> List[Blob]:
        lines = split_lines(content)
        if len(lines) <= self.max_lines:
            return [Blob(path=path, content=content)]

        total = math.ceil(len(lines) / self.max_lines)
        blobs = []
        for i in range(total):
            group = lines[i * self.max_lines : (i + 1) * self.max_lines]
            blobs.append(Blob(path=chunk_path(path, i + 1, total), content="".join(group)))

        logger.debug(f"{CHUNKING} Split {path} ({len(lines)} lines) into {total} chunks")
        return blobs


__all__ = ["Blob", "LineChunker", "split_lines", "chunk_path"]
