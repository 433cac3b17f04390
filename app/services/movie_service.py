# app/services/movie_service.py

import logging
from typing import Any, List, Optional

from app.data_access.mongo_client import MovieRepository
from app.models.movie import MovieRead
from app.services.validation import validate_movie_input

logger = logging.getLogger(__name__)


class MovieNotFoundError(Exception):
    """Custom exception when a movie is not found."""
    pass


class MovieService:
    def __init__(self, repository: MovieRepository):
        """
        Initializes the Movie Service.

        Args:
            repository: The MovieRepository bound to the shared database handle.
        """
        self.repository = repository

    async def list_movies(self) -> List[MovieRead]:
        movies = await self.repository.list_all()
        logger.debug(f"Listed {len(movies)} movies.")
        return movies

    async def search_movies(self, query: Optional[str]) -> List[MovieRead]:
        movies = await self.repository.find_by_text_match(query)
        logger.debug(f"Search for '{query}' matched {len(movies)} movies.")
        return movies

    async def get_movie(self, movie_id: str) -> MovieRead:
        movie = await self.repository.find_by_id(movie_id)
        if movie is None:
            raise MovieNotFoundError(f"Movie with ID '{movie_id}' not found.")
        return movie

    async def create_movie(self, payload: Any) -> MovieRead:
        """
        Validates a full MovieInput and stores it.

        Raises:
            MovieValidationError: If any field breaks its constraints.
            StoreUnavailableError: If the database call fails.
        """
        candidate = validate_movie_input(payload)
        movie = await self.repository.insert(candidate)
        logger.info(f"Created movie {movie.id} ('{movie.title}').")
        return movie

    async def update_movie(self, movie_id: str, payload: Any) -> MovieRead:
        """
        Validates the supplied fields and applies them as a partial patch.

        Raises:
            MovieValidationError: If a supplied field breaks its constraints.
            MovieNotFoundError: If no movie has this id.
            StoreUnavailableError: If the database call fails.
        """
        patch = validate_movie_input(payload, partial=True)
        movie = await self.repository.update_by_id(movie_id, patch)
        if movie is None:
            raise MovieNotFoundError(f"Movie with ID '{movie_id}' not found.")
        logger.info(f"Updated movie {movie_id} (fields: {sorted(patch) or 'none'}).")
        return movie

    async def delete_movie(self, movie_id: str) -> None:
        deleted = await self.repository.delete_by_id(movie_id)
        if not deleted:
            raise MovieNotFoundError(f"Movie with ID '{movie_id}' not found.")
        logger.info(f"Deleted movie {movie_id}.")
