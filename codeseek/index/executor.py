# codeseek/index/executor.py
"""
Executor for incremental indexing.

One linear pass per call:
1. Normalize the project path (the key in the project index)
2. Scan text files
3. Chunk and hash every file into blobs
4. Diff the blob names against the recorded set
5. Upload the new blobs in batches
6. Persist existing + uploaded names

Expected failures never escape as exceptions: a bad root, an empty
project or a failed save come back as an IndexResult with status
``error``. Failed batches only downgrade the run to ``partial_success``,
and their blobs are never recorded.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Optional

from codeseek.backend.client import BackendClient
from codeseek.core.config.schema import CodeseekConfig
from codeseek.core.exceptions import NoFilesFoundError, PathError, PersistenceError
from codeseek.index.chunking import Blob, LineChunker
from codeseek.index.differ import compute_blob_diff
from codeseek.index.hashing import compute_blob_name
from codeseek.index.paths import normalize_project_path
from codeseek.index.scanner import FileScanner, ScanOptions
from codeseek.index.state import JsonProjectIndexStore, ProjectIndexStore
from codeseek.index.uploader import BatchUploader, UploadOutcome
from codeseek.logging.logger import get_logger
from codeseek.logging.tags import INDEX

logger = get_logger(__name__)


class IndexStatus(str, Enum):
    SUCCESS = "success"
    PARTIAL_SUCCESS = "partial_success"
    ERROR = "error"


@dataclass
class IndexStats:
    """Blob counts of one indexing run."""

    total_blobs: int = 0
    existing_blobs: int = 0
    new_blobs: int = 0
    skipped_blobs: int = 0
    files_scanned: int = 0

    def to_dict(self) -> Dict[str, int]:
        return {
            "total_blobs": self.total_blobs,
            "existing_blobs": self.existing_blobs,
            "new_blobs": self.new_blobs,
            "skipped_blobs": self.skipped_blobs,
            "files_scanned": self.files_scanned,
        }


@dataclass
class IndexResult:
    """Outcome of one indexing run. Returned to the caller, never stored."""

    status: IndexStatus
    message: str
    project_path: Optional[str] = None
    failed_batches: List[int] = field(default_factory=list)
    stats: Optional[IndexStats] = None

    @property
    def ok(self) -> bool:
        return self.status is not IndexStatus.ERROR

    def to_dict(self) -> Dict[str, object]:
        data: Dict[str, object] = {"status": self.status.value, "message": self.message}
        if self.project_path is not None:
            data["project_path"] = self.project_path
            data["failed_batches"] = list(self.failed_batches)
        if self.stats is not None:
            data["stats"] = self.stats.to_dict()
        return data

    @classmethod
    def error(cls, message: str, project_path: Optional[str] = None) -> "IndexResult":
        return cls(status=IndexStatus.ERROR, message=message, project_path=project_path)


class IndexExecutor:
    """
    Runs the indexing pipeline for one project at a time.

    All collaborators are passed in, so tests can swap the HTTP transport,
    the store and the sleep function.

    Usage:
        executor = IndexExecutor(
            config=config,
            client=BackendClient(config.base_url, config.token),
            store=JsonProjectIndexStore(config.projects_file),
        )
        result = executor.run("/path/to/project")
    """

    def __init__(
        self,
        config: CodeseekConfig,
        client: BackendClient,
        store: ProjectIndexStore,
        *,
        scanner: Optional[FileScanner] = None,
        uploader: Optional[BatchUploader] = None,
        log: Optional[logging.Logger] = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._config = config
        self._client = client
        self._store = store
        self._scanner = scanner or FileScanner(ScanOptions.from_config(config))
        self._chunker = LineChunker(config.max_lines_per_blob)
        self._uploader = uploader or BatchUploader(
            client, timeout=config.upload_timeout, sleep=sleep
        )
        self._log = log or logger

    @property
    def store(self) -> ProjectIndexStore:
        return self._store

    @property
    def client(self) -> BackendClient:
        return self._client

    def run(self, project_root: str) -> IndexResult:
        """Index ``project_root`` and report what happened."""
        try:
            project_path = normalize_project_path(project_root)
        except PathError as e:
            self._log.error(f"{INDEX} Invalid project path {project_root!r}: {e}")
            return IndexResult.error(str(e))

        self._log.info(f"{INDEX} Indexing project: {project_path}")

        try:
            return self._run(project_path)
        except (PathError, NoFilesFoundError, PersistenceError) as e:
            self._log.error(f"{INDEX} Failed to index project {project_path}: {e}")
            return IndexResult.error(str(e), project_path=project_path)

    def _run(self, project_path: str) -> IndexResult:
        # 1. Scan
        scan_result = self._scanner.scan(project_path)
        if not scan_result.files:
            raise NoFilesFoundError("No text files found in project")

        # 2. Chunk + hash; duplicate names collapse into one candidate
        candidates: Dict[str, Blob] = {}
        for scanned in scan_result.files:
            for blob in self._chunker.split(scanned.rel_path, scanned.content):
                candidates.setdefault(compute_blob_name(blob.path, blob.content), blob)

        self._log.info(
            f"{INDEX} Collected {len(candidates)} blobs from {len(scan_result.files)} files"
        )

        # 3. Diff
        recorded = self._store.load().get(project_path, [])
        diff = compute_blob_diff(candidates, recorded)
        self._log.info(f"{INDEX} Diff: {diff.summary}")

        # 4. Upload
        if diff.new:
            outcome = self._uploader.upload(list(diff.new.values()), self._config.batch_size)
        else:
            self._log.info(f"{INDEX} No new blobs to upload, all blobs already exist in index")
            outcome = UploadOutcome()

        # 5. Persist; names from failed batches never appear in the upload outcome
        blob_names = list(dict.fromkeys([*diff.existing, *outcome.uploaded_ids]))
        projects = self._store.load()
        projects[project_path] = blob_names
        self._store.save(projects)

        # 6. Report
        stats = IndexStats(
            total_blobs=len(blob_names),
            existing_blobs=len(diff.existing),
            new_blobs=len(outcome.uploaded_ids),
            skipped_blobs=len(diff.existing),
            files_scanned=len(scan_result.files),
        )
        message = self._build_message(stats, outcome)

        if outcome.failed_batch_indices:
            self._log.warning(f"{INDEX} Project {project_path} indexed with some failures: {message}")
            status = IndexStatus.PARTIAL_SUCCESS
        else:
            self._log.info(f"{INDEX} Project {project_path} indexed successfully: {message}")
            status = IndexStatus.SUCCESS

        return IndexResult(
            status=status,
            message=message,
            project_path=project_path,
            failed_batches=list(outcome.failed_batch_indices),
            stats=stats,
        )

    @staticmethod
    def _build_message(stats: IndexStats, outcome: UploadOutcome) -> str:
        if outcome.total_batches > 0:
            message = (
                f"Project indexed with {stats.total_blobs} total blobs "
                f"(existing: {stats.existing_blobs}, new: {stats.new_blobs}, "
                f"batches: {outcome.successful_batches}/{outcome.total_batches} successful)"
            )
        else:
            message = (
                f"Project indexed with {stats.total_blobs} total blobs "
                "(all existing, no upload needed)"
            )

        if outcome.failed_batch_indices:
            message += f". Failed batches: {', '.join(str(i) for i in outcome.failed_batch_indices)}"
        return message


def build_executor(
    config: CodeseekConfig,
    *,
    client: Optional[BackendClient] = None,
    store: Optional[ProjectIndexStore] = None,
    sleep: Callable[[float], None] = time.sleep,
) -> IndexExecutor:
    """Wire an executor from configuration."""
    client = client or BackendClient(config.base_url, config.token, config.custom_headers)
    store = store or JsonProjectIndexStore(config.projects_file)
    return IndexExecutor(config, client, store, sleep=sleep)


__all__ = [
    "IndexStatus",
    "IndexStats",
    "IndexResult",
    "IndexExecutor",
    "build_executor",
]
