"""Shared pytest fixtures.

Services run against an in-memory stand-in for the Mongo collection that supports
the subset of queries the store issues: equality plus $gt/$gte/$lt/$lte, and sort.
"""

import asyncio
import copy
from datetime import UTC, datetime, timedelta
from types import SimpleNamespace
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient

from coffee_tracker.app import App
from coffee_tracker.config import Config
from coffee_tracker.core.core import Services
from coffee_tracker.core.modules.entry.models import CoffeeEntry
from coffee_tracker.web.server import create_fastapi_app

SESSION_A = "abcfabcfabcfabcfabcfabcfabcfabcf"
SESSION_B = "0123456789abcdef0123456789abcdef"

_OPERATORS = {
    "$gt": lambda value, bound: value > bound,
    "$gte": lambda value, bound: value >= bound,
    "$lt": lambda value, bound: value < bound,
    "$lte": lambda value, bound: value <= bound,
}


def _matches(document: dict[str, Any], query: dict[str, Any]) -> bool:
    for key, condition in query.items():
        value = document.get(key)
        if isinstance(condition, dict):
            if value is None:
                return False
            if not all(_OPERATORS[op](value, bound) for op, bound in condition.items()):
                return False
        elif value != condition:
            return False
    return True


class FakeCursor:
    def __init__(self, documents: list[dict[str, Any]]) -> None:
        self._documents = documents

    def sort(self, key: str, direction: int = 1) -> "FakeCursor":
        self._documents.sort(key=lambda doc: doc[key], reverse=direction < 0)
        return self

    def __aiter__(self):
        return self._iterate()

    async def _iterate(self):
        for document in self._documents:
            await asyncio.sleep(0)
            yield document


class FakeCollection:
    def __init__(self) -> None:
        self.documents: list[dict[str, Any]] = []
        self.indexes: list[list[tuple[str, int]]] = []
        self.fail_deletes = 0  # number of upcoming delete_many calls that raise

    async def create_index(self, keys: list[tuple[str, int]], **_: Any) -> str:
        self.indexes.append(keys)
        return "_".join(f"{name}_{direction}" for name, direction in keys)

    async def insert_one(self, document: dict[str, Any]) -> SimpleNamespace:
        await asyncio.sleep(0)
        self.documents.append(copy.deepcopy(document))
        return SimpleNamespace(inserted_id=document["_id"])

    async def count_documents(self, query: dict[str, Any]) -> int:
        await asyncio.sleep(0)
        return sum(1 for doc in self.documents if _matches(doc, query))

    def find(self, query: dict[str, Any]) -> FakeCursor:
        return FakeCursor([copy.deepcopy(doc) for doc in self.documents if _matches(doc, query)])

    async def delete_many(self, query: dict[str, Any]) -> SimpleNamespace:
        if self.fail_deletes:
            self.fail_deletes -= 1
            raise ConnectionError("storage unavailable")
        kept = [doc for doc in self.documents if not _matches(doc, query)]
        deleted = len(self.documents) - len(kept)
        self.documents = kept
        return SimpleNamespace(deleted_count=deleted)


class FakeDatabase:
    def __init__(self) -> None:
        self.collections: dict[str, FakeCollection] = {}

    def get_collection(self, name: str) -> FakeCollection:
        return self.collections.setdefault(name, FakeCollection())


@pytest.fixture
def config():
    """Configuration with a database URL that is never connected to."""
    return Config(database_url="mongodb://localhost:27017/coffee-tracker-test")


@pytest.fixture
def database():
    return FakeDatabase()


@pytest.fixture
def entries_collection(database):
    return database.get_collection("coffee_entries")


@pytest.fixture
def services(database, config):
    """All services wired together over the fake database, without starting the background sweep."""
    services = Services(database)
    services.set_core(SimpleNamespace(config=config, services=services))
    return services


@pytest.fixture
def add_entry(services):
    """Insert an entry directly into the store, bypassing quota checks."""

    async def _add_entry(
        session_token: str = SESSION_A,
        coffee_type: str = "Latte",
        size: str = "Medium",
        timestamp: datetime | None = None,
        source: str | None = None,
    ) -> CoffeeEntry:
        entry = CoffeeEntry(
            session_token=session_token,
            coffee_type=coffee_type,
            size=size,
            source=source,
            timestamp=timestamp or datetime.now(UTC),
        )
        return await services.entry.insert_entry(entry)

    return _add_entry


@pytest.fixture
def app(services):
    """The App facade over the fake-backed services."""
    app = App.__new__(App)
    app._core = SimpleNamespace(services=services)
    return app


@pytest.fixture
def fastapi_app(app, config):
    # ASGITransport does not run the lifespan, so state is set here
    fastapi_app = create_fastapi_app(app, config)
    fastapi_app.state.app = app
    fastapi_app.state.config = config
    return fastapi_app


@pytest.fixture
async def client(fastapi_app):
    async with AsyncClient(transport=ASGITransport(app=fastapi_app), base_url="http://test") as ac:
        yield ac


@pytest.fixture
def hours_ago():
    def _hours_ago(hours: float) -> datetime:
        return datetime.now(UTC) - timedelta(hours=hours)

    return _hours_ago
