# FastAPI dependencies and connection lifecycle
# app/api/deps.py

import logging

from fastapi import Depends, FastAPI, HTTPException, Request, status
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo.errors import PyMongoError

from app.core.config import settings
from app.data_access.mongo_client import MovieRepository
from app.services.movie_service import MovieService

logger = logging.getLogger(__name__)


async def initialize_connections(app: FastAPI) -> None:
    """
    Opens the single MongoDB client shared by every request.
    Call this during FastAPI startup using lifespan events.

    Raises:
        RuntimeError: If the server cannot be reached. Startup must not
                      continue without a store.
    """
    logger.info(f"Attempting to connect to MongoDB: {settings.MONGODB_URI.get_secret_value()[:15]}...")
    client = AsyncIOMotorClient(
        settings.MONGODB_URI.get_secret_value(),
        serverSelectionTimeoutMS=settings.MONGODB_TIMEOUT_MS,
        socketTimeoutMS=settings.MONGODB_TIMEOUT_MS,
    )
    try:
        await client.admin.command('ping')
    except PyMongoError as e:
        logger.critical(f"MongoDB connection failed during initialization: {e}", exc_info=True)
        client.close()
        raise RuntimeError(f"Failed to connect to MongoDB: {e}") from e

    db = client.get_default_database(default=settings.MONGODB_DB_NAME)
    app.state.mongo_client = client
    app.state.db = db
    logger.info(f"MongoDB client initialized successfully. Using database: '{db.name}'")


async def close_connections(app: FastAPI) -> None:
    """
    Closes the MongoDB client.
    Call this during FastAPI shutdown using lifespan events.
    """
    client = getattr(app.state, "mongo_client", None)
    if client:
        client.close()
        app.state.mongo_client = None
        app.state.db = None
        logger.info("MongoDB client closed.")


# --- Database Dependency ---

async def get_db(request: Request) -> AsyncIOMotorDatabase:
    """
    FastAPI dependency that returns the application's MongoDB database handle.

    Raises:
        HTTPException 503: If the database instance is not available.
    """
    db = getattr(request.app.state, "db", None)
    if db is None:
        logger.critical("MongoDB database instance is not available. Check initialization.")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Database service not available.",
        )
    # Motor pools connections internally; handing out the shared handle is enough
    return db


# --- Repository / Service Dependencies ---

def get_movie_repository(db: AsyncIOMotorDatabase = Depends(get_db)) -> MovieRepository:
    return MovieRepository(db, collection_name=settings.MONGODB_COLLECTION)


def get_movie_service(repository: MovieRepository = Depends(get_movie_repository)) -> MovieService:
    return MovieService(repository=repository)
