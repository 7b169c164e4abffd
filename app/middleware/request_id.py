from __future__ import annotations

import logging
import re
import time
import uuid
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from app.core.request_context import request_id_var

REQUEST_ID_HEADER = "X-Request-ID"

# Ids echoed back from clients end up in logs and response headers.
_ACCEPTED_ID = re.compile(r"[A-Za-z0-9._:-]{1,128}")

logger = logging.getLogger(__name__)


def resolve_request_id(incoming: str | None) -> str:
    """Reuse a well-formed caller id, otherwise mint a new one."""
    if incoming and _ACCEPTED_ID.fullmatch(incoming):
        return incoming
    return uuid.uuid4().hex


class RequestIdMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: Callable) -> Response:  # type: ignore[override]
        req_id = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        request.state.request_id = req_id
        token = request_id_var.set(req_id)
        started = time.perf_counter()
        try:
            response = await call_next(request)
            response.headers[REQUEST_ID_HEADER] = req_id
            logger.debug(
                "%s %s -> %d in %.2fms",
                request.method,
                request.url.path,
                response.status_code,
                (time.perf_counter() - started) * 1000,
            )
            return response
        finally:
            request_id_var.reset(token)
