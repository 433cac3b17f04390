# app/api/endpoints/search.py

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from app.api.deps import get_movie_service
from app.models.movie import MovieRead
from app.services.movie_service import MovieService

router = APIRouter()


@router.get(
    "",  # GET /api/search?q=...
    response_model=List[MovieRead],
    summary="Search Movies",
    description="Case-insensitive substring match on title or genre. An empty query returns no movies.",
)
async def search_movies(
    q: Optional[str] = Query(None, description="Text to look for in title or genre."),
    movie_service: MovieService = Depends(get_movie_service),
):
    return await movie_service.search_movies(q)
