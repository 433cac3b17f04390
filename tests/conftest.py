import os

# Settings are read at import time; the client is never connected in tests
os.environ.setdefault("MONGODB_URI", "mongodb://localhost:27017/movie_catalog_test")

import pytest
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient

from app.api.deps import get_db
from app.data_access.mongo_client import MovieRepository
from app.server import app


@pytest.fixture
def mock_db():
    return AsyncMongoMockClient()["movie_catalog_test"]


@pytest.fixture
def repository(mock_db):
    return MovieRepository(mock_db)


@pytest.fixture
def client(mock_db):
    app.dependency_overrides[get_db] = lambda: mock_db
    # No context manager: the lifespan would try to reach a real server
    yield TestClient(app)
    app.dependency_overrides.clear()
