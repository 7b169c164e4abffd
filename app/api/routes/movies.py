from __future__ import annotations

from fastapi import APIRouter, Depends, Request, Response

from app.api.json_io import read_id_param, read_json, write_json
from app.schemas.movie_schemas import MovieInput

router = APIRouter(tags=["movies"])


@router.post("/movies")
async def create_movie(request: Request) -> Response:
    """Accept a movie body and echo back what was decoded."""
    movie = await read_json(request, MovieInput)
    return write_json(200, {"movie": movie.model_dump()})


@router.get("/movie/{id}")
def show_movie(movie_id: int = Depends(read_id_param)) -> Response:
    return write_json(200, {"movie": {"id": movie_id}})
