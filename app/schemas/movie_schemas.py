from __future__ import annotations

from typing import List, Optional

from app.schemas.common import Int64, StrictModel


class MovieInput(StrictModel):
    """Body accepted by ``POST /v1/movies``; absent keys stay ``None``."""

    title: Optional[str] = None
    year: Optional[Int64] = None
    runtime: Optional[Int64] = None
    genres: Optional[List[str]] = None
