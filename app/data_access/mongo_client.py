# MongoDB repository logic for the movie collection
# app/data_access/mongo_client.py

import logging
import re
from typing import Any, Dict, List, Optional

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorCollection, AsyncIOMotorDatabase
from pymongo import ReturnDocument
from pymongo.errors import PyMongoError

from app.models.movie import MovieRead

logger = logging.getLogger(__name__)

DEFAULT_MOVIES_COLLECTION = "movies"


class StoreUnavailableError(Exception):
    """Raised when the document store cannot complete an operation."""
    pass


# --- Base Repository ---
class BaseRepository:
    """Common repository plumbing shared by collection wrappers."""
    def __init__(self, db: AsyncIOMotorDatabase, collection_name: str):
        self.db = db
        self.collection: AsyncIOMotorCollection = db[collection_name]
        logger.debug(f"Initialized repository for collection: {collection_name}")

    def _validate_object_id(self, id_str: str) -> Optional[ObjectId]:
        """Validates a string as a MongoDB ObjectId."""
        if ObjectId.is_valid(id_str):
            return ObjectId(id_str)
        logger.warning(f"Invalid ObjectId format: {id_str}")
        return None

    async def ping(self) -> None:
        """Round-trips to the server. Used by the health endpoint."""
        try:
            await self.db.command("ping")
        except PyMongoError as e:
            logger.error(f"DB ping failed: {e}", exc_info=True)
            raise StoreUnavailableError(str(e)) from e


def _to_movie(doc: Dict[str, Any]) -> MovieRead:
    """Maps a raw MongoDB document onto the API model, `_id` becoming `id`."""
    fields = {k: v for k, v in doc.items() if k != "_id"}
    return MovieRead(id=str(doc["_id"]), **fields)


# --- Movie Repository ---
class MovieRepository(BaseRepository):
    def __init__(self, db: AsyncIOMotorDatabase, collection_name: str = DEFAULT_MOVIES_COLLECTION):
        super().__init__(db, collection_name=collection_name)

    async def list_all(self) -> List[MovieRead]:
        """Returns every movie in store-default order."""
        try:
            docs = await self.collection.find({}).to_list(length=None)
        except PyMongoError as e:
            logger.error(f"DB error listing movies: {e}", exc_info=True)
            raise StoreUnavailableError(str(e)) from e
        return [_to_movie(doc) for doc in docs]

    async def find_by_text_match(self, query: Optional[str]) -> List[MovieRead]:
        """
        Finds movies whose title or genre contains `query`, ignoring case.

        The query is escaped so regex metacharacters match literally. An empty or
        absent query matches nothing and skips the store entirely. Whitespace is
        an ordinary character and is matched like any other.
        """
        if not query:
            logger.debug("Empty search query, returning no results.")
            return []

        pattern = {"$regex": re.escape(query), "$options": "i"}
        mongo_filter = {"$or": [{"title": pattern}, {"genre": pattern}]}
        try:
            docs = await self.collection.find(mongo_filter).to_list(length=None)
        except PyMongoError as e:
            logger.error(f"DB error searching movies for '{query}': {e}", exc_info=True)
            raise StoreUnavailableError(str(e)) from e
        return [_to_movie(doc) for doc in docs]

    async def find_by_id(self, movie_id: str) -> Optional[MovieRead]:
        """Finds a single movie by its ObjectId string. Malformed ids yield None."""
        obj_id = self._validate_object_id(movie_id)
        if not obj_id:
            return None
        try:
            doc = await self.collection.find_one({"_id": obj_id})
        except PyMongoError as e:
            logger.error(f"DB error finding movie by ID {movie_id}: {e}", exc_info=True)
            raise StoreUnavailableError(str(e)) from e
        return _to_movie(doc) if doc else None

    async def insert(self, candidate: Dict[str, Any]) -> MovieRead:
        """Inserts a validated movie and returns it with the generated id."""
        doc = dict(candidate)
        try:
            result = await self.collection.insert_one(doc)
        except PyMongoError as e:
            logger.error(f"DB error inserting movie: {e}", exc_info=True)
            raise StoreUnavailableError(str(e)) from e
        return MovieRead(id=str(result.inserted_id), **candidate)

    async def update_by_id(self, movie_id: str, patch: Dict[str, Any]) -> Optional[MovieRead]:
        """
        Applies the fields present in `patch` and returns the full updated movie.

        Returns None when the id is malformed or no such movie exists. An empty
        patch writes nothing and returns the current record.
        """
        obj_id = self._validate_object_id(movie_id)
        if not obj_id:
            return None
        if not patch:
            return await self.find_by_id(movie_id)
        try:
            doc = await self.collection.find_one_and_update(
                {"_id": obj_id},
                {"$set": patch},
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as e:
            logger.error(f"DB error updating movie {movie_id}: {e}", exc_info=True)
            raise StoreUnavailableError(str(e)) from e
        return _to_movie(doc) if doc else None

    async def delete_by_id(self, movie_id: str) -> bool:
        """Removes a movie. Returns False when nothing matched the id."""
        obj_id = self._validate_object_id(movie_id)
        if not obj_id:
            return False
        try:
            result = await self.collection.delete_one({"_id": obj_id})
        except PyMongoError as e:
            logger.error(f"DB error deleting movie {movie_id}: {e}", exc_info=True)
            raise StoreUnavailableError(str(e)) from e
        return result.deleted_count > 0
