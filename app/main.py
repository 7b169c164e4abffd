from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.router import api_router
from app.core.config import VERSION, settings
from app.core.logging import setup_logging
from app.middleware.errors import register_exception_handlers
from app.middleware.request_id import RequestIdMiddleware

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    logger.info("starting server", extra={"env": settings.ENV, "port": settings.PORT})
    yield
    logger.info("server stopped")


setup_logging(level=settings.LOG_LEVEL)

app = FastAPI(
    title="Movies API",
    version=VERSION,
    description="JSON API for movies",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Outermost, so error responses built below it still carry the request id.
app.add_middleware(RequestIdMiddleware)

app.include_router(api_router)
