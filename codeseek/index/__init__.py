# codeseek/index/__init__.py
"""
Incremental indexing pipeline.

Leaf pieces are re-exported here. The executor and uploader depend on the
backend client and are imported from their own modules.
"""

from codeseek.index.chunking import Blob, LineChunker, split_lines
from codeseek.index.differ import BlobDiff, compute_blob_diff
from codeseek.index.hashing import compute_blob_name
from codeseek.index.ignore import IgnoreSpec, load_ignore_spec, matches_exclude_pattern
from codeseek.index.paths import is_valid_project_path, normalize_project_path
from codeseek.index.scanner import FileScanner, ScannedFile, ScanOptions, ScanResult
from codeseek.index.state import JsonProjectIndexStore, ProjectIndexStore

__all__ = [
    "Blob",
    "LineChunker",
    "split_lines",
    "BlobDiff",
    "compute_blob_diff",
    "compute_blob_name",
    "IgnoreSpec",
    "load_ignore_spec",
    "matches_exclude_pattern",
    "normalize_project_path",
    "is_valid_project_path",
    "FileScanner",
    "ScannedFile",
    "ScanOptions",
    "ScanResult",
    "JsonProjectIndexStore",
    "ProjectIndexStore",
]
