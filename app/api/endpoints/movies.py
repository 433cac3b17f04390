# app/api/endpoints/movies.py

import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, HTTPException, Request, status

from app.api.deps import get_movie_service
from app.core.security import require_admin
from app.models.movie import ErrorResponse, MessageResponse, MovieCreate, MovieRead, MovieUpdate
from app.services.movie_service import MovieNotFoundError, MovieService
from app.services.validation import MovieValidationError

logger = logging.getLogger(__name__)
router = APIRouter()

MOVIE_NOT_FOUND = "Movie not found"


def _json_body(schema) -> Dict[str, Any]:
    return {
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": schema.model_json_schema()}},
        }
    }


async def _read_payload(request: Request) -> Any:
    """
    Decodes the JSON body inside the handler, after the admin gate has run,
    so a denied request never reaches body parsing.
    """
    try:
        return await request.json()
    except ValueError:
        raise MovieValidationError([{"field": "body", "message": "Request body must be valid JSON"}])


@router.get(
    "",  # GET /api/movies
    response_model=List[MovieRead],
    summary="List Movies",
    description="Retrieve every movie in the catalog.",
)
async def list_movies(movie_service: MovieService = Depends(get_movie_service)):
    return await movie_service.list_movies()


@router.get(
    "/{movie_id}",  # GET /api/movies/{movie_id}
    response_model=MovieRead,
    summary="Get Movie",
    responses={404: {"model": ErrorResponse, "description": "Movie not found"}},
)
async def get_movie(movie_id: str, movie_service: MovieService = Depends(get_movie_service)):
    try:
        return await movie_service.get_movie(movie_id)
    except MovieNotFoundError:
        logger.warning(f"Movie not found attempt: ID {movie_id}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=MOVIE_NOT_FOUND)


@router.post(
    "",  # POST /api/movies
    response_model=MovieRead,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
    openapi_extra=_json_body(MovieCreate),
    summary="Create Movie",
    responses={
        400: {"model": ErrorResponse, "description": "Validation error"},
        403: {"model": ErrorResponse, "description": "Admin role required"},
    },
)
async def create_movie(
    request: Request,
    movie_service: MovieService = Depends(get_movie_service),
):
    """
    Adds a movie to the catalog. Requires the `role: admin` header.
    """
    payload = await _read_payload(request)
    return await movie_service.create_movie(payload)


@router.put(
    "/{movie_id}",  # PUT /api/movies/{movie_id}
    response_model=MovieRead,
    dependencies=[Depends(require_admin)],
    openapi_extra=_json_body(MovieUpdate),
    summary="Update Movie",
    responses={
        400: {"model": ErrorResponse, "description": "Validation error"},
        403: {"model": ErrorResponse, "description": "Admin role required"},
        404: {"model": ErrorResponse, "description": "Movie not found"},
    },
)
async def update_movie(
    movie_id: str,
    request: Request,
    movie_service: MovieService = Depends(get_movie_service),
):
    """
    Applies a partial patch to an existing movie. Requires the `role: admin` header.
    """
    payload = await _read_payload(request)
    try:
        return await movie_service.update_movie(movie_id, payload)
    except MovieNotFoundError:
        logger.warning(f"Update of missing movie: ID {movie_id}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=MOVIE_NOT_FOUND)


@router.delete(
    "/{movie_id}",  # DELETE /api/movies/{movie_id}
    response_model=MessageResponse,
    dependencies=[Depends(require_admin)],
    summary="Delete Movie",
    responses={
        403: {"model": ErrorResponse, "description": "Admin role required"},
        404: {"model": ErrorResponse, "description": "Movie not found"},
    },
)
async def delete_movie(movie_id: str, movie_service: MovieService = Depends(get_movie_service)):
    try:
        await movie_service.delete_movie(movie_id)
    except MovieNotFoundError:
        logger.warning(f"Delete of missing movie: ID {movie_id}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=MOVIE_NOT_FOUND)
    return MessageResponse(message="Movie deleted")
