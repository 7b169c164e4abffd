from __future__ import annotations

from fastapi import APIRouter

from app.api.routes.healthcheck import router as healthcheck_router
from app.api.routes.movies import router as movies_router

api_router = APIRouter(prefix="/v1")
api_router.include_router(healthcheck_router)
api_router.include_router(movies_router)
