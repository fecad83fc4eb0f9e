# codeseek/search/delegate.py
"""
Search delegate: index first, then query.

Every query re-runs the indexing pipeline so the backend always sees the
project as it is on disk right now. The query then carries the project's
whole recorded blob set, not just what this run uploaded.
"""

from __future__ import annotations

import time
from typing import Callable, Optional

from codeseek.backend.client import BackendClient
from codeseek.backend.retry import SEARCH_RETRY_POLICY, RetryPolicy, with_retry
from codeseek.core.config.schema import CodeseekConfig
from codeseek.core.exceptions import BackendError, SearchError
from codeseek.index.executor import IndexExecutor, IndexStatus, build_executor
from codeseek.index.state import ProjectIndexStore
from codeseek.logging.logger import get_logger
from codeseek.logging.tags import SEARCH

logger = get_logger(__name__)

NO_RESULTS_MESSAGE = "No relevant code context found for your query."


class SearchDelegate:
    """
    Answers natural-language queries about a project.

    Usage:
        delegate = build_search_delegate(config)
        text = delegate.query("/path/to/project", "where are retries configured?")

    Raises SearchError when indexing fails outright, when the project has
    no blobs after indexing, or when the query itself fails.
    """

    def __init__(
        self,
        executor: IndexExecutor,
        client: BackendClient,
        store: ProjectIndexStore,
        *,
        timeout: float = 60.0,
        policy: RetryPolicy = SEARCH_RETRY_POLICY,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._executor = executor
        self._client = client
        self._store = store
        self._timeout = timeout
        self._policy = policy
        self._sleep = sleep

    @property
    def client(self) -> BackendClient:
        return self._client

    def query(self, project_root: str, text: str) -> str:
        logger.info(f"{SEARCH} Searching project {project_root} with query: {text}")

        result = self._executor.run(project_root)
        if result.status is IndexStatus.ERROR:
            raise SearchError(f"Failed to index project: {result.message}")
        if result.status is IndexStatus.PARTIAL_SUCCESS:
            logger.warning(f"{SEARCH} Searching a partially indexed project: {result.message}")

        if not text or not text.strip():
            raise SearchError("Query cannot be empty")

        blob_names = self._store.load().get(result.project_path, [])
        if not blob_names:
            raise SearchError(f"No blobs found for project {result.project_path} after indexing.")

        logger.info(f"{SEARCH} Sending retrieval request with {len(blob_names)} blobs")
        try:
            formatted = with_retry(
                lambda: self._client.codebase_retrieval(text, blob_names, timeout=self._timeout),
                self._policy,
                sleep=self._sleep,
            )
        except BackendError as e:
            raise SearchError(f"Search failed: {e}") from e

        if not formatted:
            logger.info(f"{SEARCH} Search returned no results")
            return NO_RESULTS_MESSAGE

        logger.info(f"{SEARCH} Search completed ({len(formatted)} chars)")
        return formatted


def build_search_delegate(
    config: CodeseekConfig,
    *,
    client: Optional[BackendClient] = None,
    store: Optional[ProjectIndexStore] = None,
    sleep: Callable[[float], None] = time.sleep,
) -> SearchDelegate:
    """Wire a delegate and its executor from configuration."""
    executor = build_executor(config, client=client, store=store, sleep=sleep)
    return SearchDelegate(
        executor,
        executor.client,
        executor.store,
        timeout=config.search_timeout,
        sleep=sleep,
    )


__all__ = ["SearchDelegate", "NO_RESULTS_MESSAGE", "build_search_delegate"]
