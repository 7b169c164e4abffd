from __future__ import annotations

from contextvars import ContextVar

# Id of the request being served by the current task; None outside a request.
request_id_var: ContextVar[str | None] = ContextVar("request_id", default=None)


def current_request_id() -> str:
    return request_id_var.get() or "-"
