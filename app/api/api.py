"""
API Router Module - Aggregates all endpoint routers
"""
from fastapi import APIRouter

from app.api.endpoints import health, movies, search

# Create the main API router
api_router = APIRouter()

# Mutating movie routes carry the admin gate in their own route dependencies
api_router.include_router(health.router, prefix="/health", tags=["Health"])
api_router.include_router(movies.router, prefix="/movies", tags=["Movies"])
api_router.include_router(search.router, prefix="/search", tags=["Movies"])
