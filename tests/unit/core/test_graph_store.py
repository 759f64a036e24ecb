"""
Tests for core/graph_store.py - session scoping and driver lifecycle.
"""
import pytest
from neo4j.exceptions import ServiceUnavailable

import core.graph_store as graph_store
from core.graph_store import READ, WRITE, GraphStore, STORE_ERRORS, RowDecodeError, StoreError
from infrastructure.config import Neo4jSettings
from tests.fakes import FakeDriver


def test_access_mode_constants_match_driver():
    assert READ == "READ"
    assert WRITE == "WRITE"


def test_store_errors_cover_driver_and_decode_failures():
    assert issubclass(RowDecodeError, StoreError)
    assert isinstance(ServiceUnavailable("x"), STORE_ERRORS)
    assert isinstance(RowDecodeError("Movie", "bad"), STORE_ERRORS)


@pytest.mark.asyncio
async def test_session_passes_mode_and_database():
    driver = FakeDriver()
    store = GraphStore(driver, database="movies")

    async with store.session(WRITE) as session:
        assert session.access_mode == "WRITE"
        assert session.database == "movies"
        assert not session.closed

    assert session.closed


@pytest.mark.asyncio
async def test_session_closed_when_body_raises():
    driver = FakeDriver()
    store = GraphStore(driver)

    with pytest.raises(RuntimeError):
        async with store.session(READ):
            raise RuntimeError("handler bailed out")

    assert driver.all_closed


@pytest.mark.asyncio
async def test_each_session_is_independent():
    driver = FakeDriver()
    store = GraphStore(driver)

    async with store.session(READ) as first:
        async with store.session(WRITE) as second:
            assert first is not second

    assert driver.access_modes == ["READ", "WRITE"]
    assert driver.all_closed


@pytest.mark.asyncio
async def test_verify_connectivity_and_close():
    driver = FakeDriver()
    store = GraphStore(driver)

    await store.verify_connectivity()
    await store.close()

    assert driver.closed


@pytest.mark.asyncio
async def test_verify_connectivity_propagates_driver_error():
    store = GraphStore(FakeDriver(error=ServiceUnavailable("Connection refused")))

    with pytest.raises(ServiceUnavailable):
        await store.verify_connectivity()


def test_from_settings_builds_driver(monkeypatch):
    calls = []

    def fake_driver(uri, auth):
        calls.append((uri, auth))
        return FakeDriver()

    monkeypatch.setattr(graph_store.AsyncGraphDatabase, "driver", fake_driver)

    store = GraphStore.from_settings(
        Neo4jSettings(uri="bolt://db:7687", user="reader", password="secret", database="films")
    )

    assert calls == [("bolt://db:7687", ("reader", "secret"))]
    assert store.database == "films"
