# tests/conftest.py
"""
Shared fixtures.

HTTP never leaves the process: FakeBackend is an httpx.MockTransport
handler that behaves like the retrieval backend (it echoes the real blob
names) and can be told to fail specific calls.
"""

from __future__ import annotations

import json
import logging
from typing import Callable, Dict, List, Optional, Set

import httpx
import pytest

import codeseek.logging.logger as logger_module
from codeseek.backend.client import BackendClient
from codeseek.core.config import CodeseekConfig
from codeseek.index.hashing import compute_blob_name

BASE_URL = "https://backend.test"
TOKEN = "test-token"


class FakeBackend:
    """In-memory stand-in for the retrieval backend."""

    def __init__(self) -> None:
        self.upload_requests: List[List[Dict[str, str]]] = []
        self.retrieval_requests: List[dict] = []
        self.headers: List[httpx.Headers] = []

        # 1-based upload call number -> HTTP status to answer with
        self.upload_status: Dict[int, int] = {}
        # blobs with these paths make every attempt of their batch fail with 500
        self.failing_paths: Set[str] = set()
        # upload call numbers that answer 200 with no names
        self.empty_echo_calls: Set[int] = set()
        # upload call numbers that raise a connection error
        self.connect_error_calls: Set[int] = set()
        # blobs with these paths get a body that claims gzip but is not
        self.corrupt_body_paths: Set[str] = set()

        self.retrieval_text: Optional[str] = "def handler(): ..."
        self.retrieval_statuses: List[int] = []

    @property
    def uploaded_paths(self) -> List[str]:
        return [b["path"] for batch in self.upload_requests for b in batch]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.headers.append(request.headers)
        body = json.loads(request.content)

        if request.url.path == "/batch-upload":
            call = len(self.upload_requests) + 1
            blobs = body["blobs"]
            self.upload_requests.append(blobs)

            if call in self.connect_error_calls:
                raise httpx.ConnectError("connection refused", request=request)
            if call in self.upload_status:
                return httpx.Response(self.upload_status[call], json={"error": "boom"})
            if any(b["path"] in self.corrupt_body_paths for b in blobs):
                return httpx.Response(200, headers={"content-encoding": "gzip"}, content=b"not gzip at all")
            if any(b["path"] in self.failing_paths for b in blobs):
                return httpx.Response(500, json={"error": "boom"})
            if call in self.empty_echo_calls:
                return httpx.Response(200, json={"blob_names": []})

            names = [compute_blob_name(b["path"], b["content"]) for b in blobs]
            return httpx.Response(200, json={"blob_names": names})

        if request.url.path == "/agents/codebase-retrieval":
            self.retrieval_requests.append(body)
            if self.retrieval_statuses:
                status = self.retrieval_statuses.pop(0)
                if status != 200:
                    return httpx.Response(status, json={"error": "boom"})
            return httpx.Response(200, json={"formatted_retrieval": self.retrieval_text})

        return httpx.Response(404, json={"error": "not found"})

    def client(self, custom_headers: Optional[Dict[str, str]] = None) -> BackendClient:
        return BackendClient(
            BASE_URL,
            TOKEN,
            custom_headers,
            transport=httpx.MockTransport(self.handler),
        )


class FakeSleep:
    """Records requested delays instead of sleeping."""

    def __init__(self) -> None:
        self.calls: List[float] = []

    def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


@pytest.fixture
def fake_backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def fake_sleep() -> FakeSleep:
    return FakeSleep()


@pytest.fixture
def make_config(tmp_path) -> Callable[..., CodeseekConfig]:
    """Build a config whose project index lives under tmp_path."""

    def _make(**overrides) -> CodeseekConfig:
        values = {
            "base_url": BASE_URL,
            "token": TOKEN,
            "index_storage_path": tmp_path / "data",
        }
        values.update(overrides)
        return CodeseekConfig(**values)

    return _make


@pytest.fixture
def codeseek_home(tmp_path, monkeypatch):
    """Point the workspace at a temp dir."""
    home = tmp_path / "home"
    monkeypatch.setenv("CODESEEK_HOME", str(home))
    return home


@pytest.fixture(autouse=True)
def _reset_logging():
    yield
    root = logging.getLogger(logger_module.ROOT_LOGGER_NAME)
    for handler in root.handlers[:]:
        handler.close()
        root.removeHandler(handler)
    root.propagate = True
    root.setLevel(logging.NOTSET)
    logger_module._configured = False
