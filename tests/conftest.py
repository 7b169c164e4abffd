from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Callable, Iterable

import pytest
from fastapi.testclient import TestClient
from starlette.requests import Request

# Ensure the repository root is importable when running from a checkout
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# Required configuration must exist before app.core.config is imported
os.environ.setdefault("PORT", "4000")
os.environ.setdefault("ENV", "testing")
os.environ.setdefault("LOG_LEVEL", "debug")

from app.main import app  # noqa: E402


@pytest.fixture(scope="session")
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture
def make_request() -> Callable[..., Request]:
    """Factory for bare requests whose body arrives in the given chunks."""

    def _make(
        body: bytes | Iterable[bytes] = b"",
        *,
        headers: dict[str, str] | None = None,
        path_params: dict[str, str] | None = None,
    ) -> Request:
        chunks = [body] if isinstance(body, bytes) else list(body)

        async def receive() -> dict:
            if chunks:
                chunk = chunks.pop(0)
                return {"type": "http.request", "body": chunk, "more_body": bool(chunks)}
            return {"type": "http.request", "body": b"", "more_body": False}

        scope = {
            "type": "http",
            "method": "POST",
            "path": "/",
            "query_string": b"",
            "headers": [
                (k.lower().encode("latin-1"), v.encode("latin-1"))
                for k, v in (headers or {}).items()
            ],
            "path_params": path_params or {},
        }
        return Request(scope, receive)

    return _make
