"""Pydantic schemas for requests and responses."""

from .common import Envelope, StrictModel  # noqa: F401
from .movie_schemas import MovieInput  # noqa: F401
