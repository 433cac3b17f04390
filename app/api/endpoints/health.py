# /health endpoint
# app/api/endpoints/health.py

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel

from app.api.deps import get_movie_repository
from app.data_access.mongo_client import MovieRepository, StoreUnavailableError

logger = logging.getLogger(__name__)
router = APIRouter()


class HealthResponse(BaseModel):
    status: str = "ok"
    database: str = "ok"


@router.get(
    "",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    summary="Perform a Health Check",
    response_description="Returns the health status of the API and its database.",
)
async def health_check(repository: MovieRepository = Depends(get_movie_repository)):
    """
    Confirms the API is running and the database answers a ping.
    """
    try:
        await repository.ping()
    except StoreUnavailableError:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Database service not available.",
        )
    return HealthResponse()
