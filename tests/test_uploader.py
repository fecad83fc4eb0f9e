# tests/test_uploader.py
"""
Tests for codeseek.index.uploader.

One failing batch must never stop the batches after it.
"""

import pytest

from codeseek.index.chunking import Blob
from codeseek.index.hashing import compute_blob_name
from codeseek.index.uploader import BatchUploader


def _blobs(n):
    return [Blob(path=f"f{i}.py", content=f"content {i}\n") for i in range(1, n + 1)]


def _names(blobs):
    return [compute_blob_name(b.path, b.content) for b in blobs]


class TestBatchUploader:
    """Batching, retries and failure isolation."""

    def test_partitions_into_batches(self, fake_backend, fake_sleep):
        uploader = BatchUploader(fake_backend.client(), sleep=fake_sleep)
        blobs = _blobs(5)

        outcome = uploader.upload(blobs, batch_size=2)

        assert [len(batch) for batch in fake_backend.upload_requests] == [2, 2, 1]
        assert outcome.total_batches == 3
        assert outcome.failed_batch_indices == []
        assert outcome.uploaded_ids == _names(blobs)

    def test_failed_middle_batch_does_not_stop_later_batches(self, fake_backend, fake_sleep):
        fake_backend.failing_paths = {"f3.py"}
        uploader = BatchUploader(fake_backend.client(), sleep=fake_sleep)
        blobs = _blobs(5)

        outcome = uploader.upload(blobs, batch_size=2)

        assert outcome.failed_batch_indices == [2]
        assert outcome.uploaded_ids == _names(blobs[:2] + blobs[4:])
        assert outcome.successful_batches == 2
        # batch 2 tried three times, batch 3 still sent
        assert fake_backend.uploaded_paths.count("f3.py") == 3
        assert "f5.py" in fake_backend.uploaded_paths
        assert fake_sleep.calls == [1.0, 2.0]

    def test_transient_failure_recovers(self, fake_backend, fake_sleep):
        fake_backend.connect_error_calls = {1}
        fake_backend.upload_status = {2: 502}
        uploader = BatchUploader(fake_backend.client(), sleep=fake_sleep)

        outcome = uploader.upload(_blobs(2), batch_size=2)

        assert outcome.failed_batch_indices == []
        assert len(fake_backend.upload_requests) == 3
        assert fake_sleep.calls == [1.0, 2.0]

    def test_client_error_fails_batch_without_retry(self, fake_backend, fake_sleep):
        fake_backend.upload_status = {1: 401}
        uploader = BatchUploader(fake_backend.client(), sleep=fake_sleep)

        outcome = uploader.upload(_blobs(3), batch_size=2)

        assert outcome.failed_batch_indices == [1]
        assert len(fake_backend.upload_requests) == 2
        assert fake_sleep.calls == []

    def test_empty_echo_is_a_failed_batch(self, fake_backend, fake_sleep):
        fake_backend.empty_echo_calls = {1}
        uploader = BatchUploader(fake_backend.client(), sleep=fake_sleep)
        blobs = _blobs(3)

        outcome = uploader.upload(blobs, batch_size=2)

        assert outcome.failed_batch_indices == [1]
        assert outcome.uploaded_ids == _names(blobs[2:])

    def test_all_batches_failing(self, fake_backend, fake_sleep):
        fake_backend.upload_status = {1: 400, 2: 400}
        uploader = BatchUploader(fake_backend.client(), sleep=fake_sleep)

        outcome = uploader.upload(_blobs(4), batch_size=2)

        assert outcome.all_failed
        assert outcome.uploaded_ids == []

    def test_nothing_to_upload(self, fake_backend, fake_sleep):
        outcome = BatchUploader(fake_backend.client(), sleep=fake_sleep).upload([], batch_size=10)

        assert outcome.total_batches == 0
        assert fake_backend.upload_requests == []

    def test_invalid_batch_size(self, fake_backend):
        with pytest.raises(ValueError):
            BatchUploader(fake_backend.client()).upload(_blobs(1), batch_size=0)
