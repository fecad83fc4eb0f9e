# tests/test_differ.py
"""
Tests for codeseek.index.differ.
"""

from codeseek.index.chunking import Blob
from codeseek.index.differ import compute_blob_diff


def _candidates(*names):
    return {name: Blob(path=f"{name}.py", content=name) for name in names}


class TestComputeBlobDiff:
    """Partition into existing and new."""

    def test_everything_new_without_record(self):
        diff = compute_blob_diff(_candidates("a", "b"), [])

        assert diff.existing == []
        assert list(diff.new) == ["a", "b"]

    def test_recorded_names_are_existing(self):
        diff = compute_blob_diff(_candidates("a", "b", "c"), ["b", "zzz"])

        assert diff.existing == ["b"]
        assert list(diff.new) == ["a", "c"]
        assert diff.total == 3

    def test_stale_recorded_names_are_ignored(self):
        diff = compute_blob_diff(_candidates("a"), ["old1", "old2"])

        assert diff.existing == []
        assert list(diff.new) == ["a"]

    def test_summary(self):
        diff = compute_blob_diff(_candidates("a", "b"), ["a"])

        assert diff.summary == "existing=1, new=1"
