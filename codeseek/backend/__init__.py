# codeseek/backend/__init__.py
"""Retrieval backend access: HTTP client and retry helpers."""

from codeseek.backend.client import BackendClient
from codeseek.backend.retry import (
    SEARCH_RETRY_POLICY,
    UPLOAD_RETRY_POLICY,
    RetryPolicy,
    is_retryable_error,
    with_retry,
)

__all__ = [
    "BackendClient",
    "RetryPolicy",
    "UPLOAD_RETRY_POLICY",
    "SEARCH_RETRY_POLICY",
    "with_retry",
    "is_retryable_error",
]
