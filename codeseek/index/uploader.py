# codeseek/index/uploader.py
"""
Batched blob upload with per-batch failure isolation.

Batches go out one after another. A batch that still fails after its
retries is recorded by its 1-based index and the next batch is sent
anyway. Only the names the backend echoes back count as uploaded.
"""

from __future__ import annotations

import math
import time
from dataclasses import dataclass, field
from typing import Callable, List, Sequence

from codeseek.backend.client import BackendClient
from codeseek.backend.retry import UPLOAD_RETRY_POLICY, RetryPolicy, with_retry
from codeseek.core.exceptions import BackendError
from codeseek.index.chunking import Blob
from codeseek.logging.logger import get_logger
from codeseek.logging.tags import UPLOAD

logger = get_logger(__name__)


@dataclass
class UploadOutcome:
    """What a multi-batch upload achieved."""

    uploaded_ids: List[str] = field(default_factory=list)
    failed_batch_indices: List[int] = field(default_factory=list)
    total_batches: int = 0

    @property
    def successful_batches(self) -> int:
        return self.total_batches - len(self.failed_batch_indices)

    @property
    def all_failed(self) -> bool:
        return self.total_batches > 0 and self.successful_batches == 0


class BatchUploader:
    """
    Sends blobs to the backend in fixed-size batches.

    Usage:
        uploader = BatchUploader(client, timeout=config.upload_timeout)
        outcome = uploader.upload(blobs, batch_size=10)
        if outcome.failed_batch_indices:
            ...
    """

    def __init__(
        self,
        client: BackendClient,
        policy: RetryPolicy = UPLOAD_RETRY_POLICY,
        timeout: float = 30.0,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._client = client
        self._policy = policy
        self._timeout = timeout
        self._sleep = sleep

    def upload(self, blobs: Sequence[Blob], batch_size: int) -> UploadOutcome:
        if batch_size < 1:
            raise ValueError(f"batch_size must be >= 1, got {batch_size}")

        total = math.ceil(len(blobs) / batch_size)
        outcome = UploadOutcome(total_batches=total)
        if total == 0:
            return outcome

        logger.info(f"{UPLOAD} Uploading {len(blobs)} new blobs in {total} batches (batch size: {batch_size})")

        for batch_idx in range(total):
            number = batch_idx + 1
            batch = list(blobs[batch_idx * batch_size : (batch_idx + 1) * batch_size])
            logger.info(f"{UPLOAD} Uploading batch {number}/{total} ({len(batch)} blobs)")

            try:
                names = with_retry(
                    lambda: self._client.batch_upload(batch, timeout=self._timeout),
                    self._policy,
                    sleep=self._sleep,
                )
            except BackendError as e:
                logger.error(f"{UPLOAD} Batch {number} failed after retries: {e}. Continuing with next batch...")
                outcome.failed_batch_indices.append(number)
                continue

            if not names:
                logger.error(f"{UPLOAD} Batch {number} returned no blob names")
                outcome.failed_batch_indices.append(number)
                continue

            outcome.uploaded_ids.extend(names)
            logger.info(f"{UPLOAD} Batch {number} uploaded successfully, got {len(names)} blob names")

        return outcome


__all__ = ["BatchUploader", "UploadOutcome"]
