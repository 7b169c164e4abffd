from __future__ import annotations

from fastapi import APIRouter, Response

from app.api.json_io import write_json
from app.core.config import VERSION, settings

router = APIRouter(tags=["health"])


@router.get("/healthcheck")
def healthcheck() -> Response:
    """Liveness probe reporting the running environment and version."""
    return write_json(
        200,
        {
            "status": "available",
            "system_info": {
                "environment": settings.ENV,
                "version": VERSION,
            },
        },
    )
