# codeseek/backend/client.py
"""
HTTP client for the retrieval backend.

Endpoints:
    POST {base_url}/batch-upload
        {"blobs": [{"path": ..., "content": ...}]} -> {"blob_names": [...]}
    POST {base_url}/agents/codebase-retrieval
        {"information_request": ..., "blobs": {...}, ...} -> {"formatted_retrieval": ...}

Failures are mapped onto the BackendError family:
- transport errors and timeouts -> NetworkError
- 5xx -> ServerError
- 4xx -> ClientError
- unusable 2xx body -> BackendResponseError

Retrying is the caller's business (see codeseek.backend.retry).
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

import httpx

from codeseek.core.config.schema import mask_header_value
from codeseek.core.exceptions import BackendResponseError, ClientError, NetworkError, ServerError
from codeseek.index.chunking import Blob
from codeseek.logging.logger import get_logger
from codeseek.logging.tags import BACKEND

logger = get_logger(__name__)

BATCH_UPLOAD_ENDPOINT = "/batch-upload"
RETRIEVAL_ENDPOINT = "/agents/codebase-retrieval"


class BackendClient:
    """
    Thin wrapper over httpx.Client with bearer auth.

    Usage:
        client = BackendClient("https://api.example.com", token="...")
        names = client.batch_upload([Blob("a.py", "print(1)\\n")], timeout=30)
        text = client.codebase_retrieval("where is auth?", names, timeout=60)
    """

    def __init__(
        self,
        base_url: str,
        token: str,
        custom_headers: Optional[Dict[str, str]] = None,
        *,
        transport: Optional[httpx.BaseTransport] = None,
        client: Optional[httpx.Client] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")

        headers = {"Content-Type": "application/json"}
        headers.update(custom_headers or {})
        headers["Authorization"] = f"Bearer {token}"

        if client is None:
            client = httpx.Client(base_url=self.base_url, headers=headers, transport=transport)
        else:
            client.headers.update(headers)
        self.client = client

        if custom_headers:
            masked = {k: mask_header_value(k, v) for k, v in custom_headers.items()}
            logger.debug(f"{BACKEND} Using custom headers: {masked}")
        logger.debug(f"{BACKEND} Backend client initialized: {self.base_url}")

    # =========================================================================
    # Endpoints
    # =========================================================================

    def batch_upload(self, blobs: Sequence[Blob], timeout: float = 30.0) -> List[str]:
        """
        Upload one batch. Returns the blob names the backend accepted.

        An answer without names is not an error here; the uploader decides
        what an empty echo means.
        """
        payload = {"blobs": [blob.to_payload() for blob in blobs]}
        data = self._post(BATCH_UPLOAD_ENDPOINT, payload, timeout)

        names = data.get("blob_names", [])
        if names is None:
            names = []
        if not isinstance(names, list) or not all(isinstance(n, str) for n in names):
            raise BackendResponseError("Invalid batch-upload response: 'blob_names' must be a list of strings")
        return names

    def codebase_retrieval(
        self,
        query: str,
        blob_names: Sequence[str],
        timeout: float = 60.0,
    ) -> str:
        """Run a retrieval query over the given blobs. Returns the formatted text."""
        payload = {
            "information_request": query,
            "blobs": {
                "checkpoint_id": None,
                "added_blobs": list(blob_names),
                "deleted_blobs": [],
            },
            "dialog": [],
            "max_output_length": 0,
            "disable_codebase_retrieval": False,
            "enable_commit_retrieval": False,
        }
        data = self._post(RETRIEVAL_ENDPOINT, payload, timeout)

        text = data.get("formatted_retrieval", "")
        if text is None:
            return ""
        if not isinstance(text, str):
            raise BackendResponseError("Invalid retrieval response: 'formatted_retrieval' must be a string")
        return text

    # =========================================================================
    # Plumbing
    # =========================================================================

    def _post(self, endpoint: str, payload: Dict[str, Any], timeout: float) -> Dict[str, Any]:
        url = f"{self.base_url}{endpoint}"
        try:
            response = self.client.post(url, json=payload, timeout=timeout)
        except httpx.TimeoutException as e:
            raise NetworkError(f"Request to {endpoint} timed out: {e}") from e
        except httpx.TransportError as e:
            raise NetworkError(f"Request to {endpoint} failed: {e}") from e
        except httpx.RequestError as e:
            raise NetworkError(f"Request to {endpoint} could not be completed: {e}") from e

        status = response.status_code
        if status >= 500:
            raise ServerError(f"{endpoint} returned HTTP {status}: {response.text[:200]}", status)
        if status >= 400:
            raise ClientError(f"{endpoint} returned HTTP {status}: {response.text[:200]}", status)

        try:
            data = response.json()
        except ValueError as e:
            raise BackendResponseError(f"{endpoint} returned invalid JSON: {e}", status) from e
        if not isinstance(data, dict):
            raise BackendResponseError(f"{endpoint} returned a non-object JSON body", status)
        return data

    def close(self) -> None:
        self.client.close()

    def __enter__(self) -> "BackendClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


__all__ = ["BackendClient", "BATCH_UPLOAD_ENDPOINT", "RETRIEVAL_ENDPOINT"]
