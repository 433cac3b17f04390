from unittest.mock import AsyncMock, MagicMock

import pytest
from bson import ObjectId
from pymongo.errors import ServerSelectionTimeoutError

from app.data_access.mongo_client import MovieRepository, StoreUnavailableError

MATRIX = {"title": "The Matrix", "genre": "Sci-Fi", "rating": 9.0, "streamingLink": "http://example.com/matrix"}
HEAT = {"title": "Heat", "genre": "Crime", "rating": 8.3, "streamingLink": "http://example.com/heat"}
ARRIVAL = {"title": "Arrival", "genre": "sci-fi drama", "rating": 7.9, "streamingLink": "http://example.com/arrival"}


async def test_insert_assigns_id_and_lists_once(repository):
    created = await repository.insert(MATRIX)
    assert ObjectId.is_valid(created.id)

    movies = await repository.list_all()
    matches = [m for m in movies if m.id == created.id]
    assert len(matches) == 1
    assert matches[0].model_dump(exclude={"id"}) == MATRIX


async def test_insert_does_not_mutate_candidate(repository):
    candidate = dict(HEAT)
    await repository.insert(candidate)
    assert candidate == HEAT


async def test_ids_are_unique(repository):
    first = await repository.insert(MATRIX)
    second = await repository.insert(MATRIX)
    assert first.id != second.id


async def test_search_matches_title_or_genre_ignoring_case(repository):
    matrix = await repository.insert(MATRIX)
    arrival = await repository.insert(ARRIVAL)
    await repository.insert(HEAT)

    by_genre = {m.id for m in await repository.find_by_text_match("sci")}
    assert by_genre == {matrix.id, arrival.id}

    assert {m.id for m in await repository.find_by_text_match("SCI-FI")} == {matrix.id, arrival.id}
    assert [m.id for m in await repository.find_by_text_match("matrix")] == [matrix.id]


async def test_search_treats_regex_characters_literally(repository):
    await repository.insert(MATRIX)
    assert await repository.find_by_text_match(".*") == []
    assert len(await repository.find_by_text_match("i-F")) == 1


@pytest.mark.parametrize("query", [None, ""])
async def test_empty_search_returns_nothing(repository, query):
    await repository.insert(MATRIX)
    assert await repository.find_by_text_match(query) == []


async def test_space_query_matches_multi_word_titles(repository):
    matrix = await repository.insert(MATRIX)
    await repository.insert(HEAT)
    assert [m.id for m in await repository.find_by_text_match(" ")] == [matrix.id]
    assert await repository.find_by_text_match("   ") == []


async def test_update_applies_only_patch_fields(repository):
    created = await repository.insert(MATRIX)
    updated = await repository.update_by_id(created.id, {"rating": 8.5})

    assert updated.rating == 8.5
    assert updated.title == MATRIX["title"]
    assert updated.genre == MATRIX["genre"]
    assert updated.streamingLink == MATRIX["streamingLink"]
    assert (await repository.find_by_id(created.id)) == updated


async def test_update_with_empty_patch_returns_unchanged_record(repository):
    created = await repository.insert(MATRIX)
    assert await repository.update_by_id(created.id, {}) == created


async def test_update_missing_or_malformed_id_returns_none(repository):
    assert await repository.update_by_id(str(ObjectId()), {"rating": 1}) is None
    assert await repository.update_by_id("not-an-id", {"rating": 1}) is None


async def test_delete_reports_whether_record_existed(repository):
    created = await repository.insert(MATRIX)
    assert await repository.delete_by_id(created.id) is True
    assert await repository.delete_by_id(created.id) is False
    assert await repository.delete_by_id("not-an-id") is False
    assert await repository.list_all() == []


async def test_find_by_id_malformed_returns_none(repository):
    assert await repository.find_by_id("12345") is None


def _broken_repository():
    db = MagicMock()
    collection = db["movies"]
    collection.find.return_value.to_list = AsyncMock(side_effect=ServerSelectionTimeoutError("no servers"))
    collection.insert_one = AsyncMock(side_effect=ServerSelectionTimeoutError("no servers"))
    collection.find_one_and_update = AsyncMock(side_effect=ServerSelectionTimeoutError("no servers"))
    collection.delete_one = AsyncMock(side_effect=ServerSelectionTimeoutError("no servers"))
    db.command = AsyncMock(side_effect=ServerSelectionTimeoutError("no servers"))
    return MovieRepository(db)


async def test_store_errors_surface_as_store_unavailable():
    repository = _broken_repository()
    oid = str(ObjectId())

    with pytest.raises(StoreUnavailableError):
        await repository.list_all()
    with pytest.raises(StoreUnavailableError):
        await repository.find_by_text_match("matrix")
    with pytest.raises(StoreUnavailableError):
        await repository.insert(MATRIX)
    with pytest.raises(StoreUnavailableError):
        await repository.update_by_id(oid, {"rating": 5})
    with pytest.raises(StoreUnavailableError):
        await repository.delete_by_id(oid)
    with pytest.raises(StoreUnavailableError):
        await repository.ping()
