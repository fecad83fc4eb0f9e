# codeseek/index/differ.py
"""
Diff computation for incremental indexing.

Compares the blob names produced by this run with the names recorded for
the project. Blob identity decides: a changed file simply produces new
names, an unchanged one produces names that are already recorded.

This module ONLY computes the partition. Uploading and persisting are
handled by the executor.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List

from codeseek.index.chunking import Blob


@dataclass
class BlobDiff:
    """
    Result of diffing a run's blobs against the recorded set.

    - existing: names already recorded, in candidate order
    - new: name -> blob for everything that still has to be uploaded
    """

    existing: List[str] = field(default_factory=list)
    new: Dict[str, Blob] = field(default_factory=dict)

    @property
    def total(self) -> int:
        return len(self.existing) + len(self.new)

    @property
    def summary(self) -> str:
        return f"existing={len(self.existing)}, new={len(self.new)}"


def compute_blob_diff(candidates: Dict[str, Blob], recorded: Iterable[str]) -> BlobDiff:
    """
    Partition candidate blobs into already recorded and new.

    Args:
        candidates: Blob name -> blob for every blob of the current run.
            Duplicate names have already collapsed into one key.
        recorded: Names previously stored for the project.
    """
    recorded_set = set(recorded)
    diff = BlobDiff()
    for name, blob in candidates.items():
        if name in recorded_set:
            diff.existing.append(name)
        else:
            diff.new[name] = blob
    return diff


__all__ = ["BlobDiff", "compute_blob_diff"]
