"""
Unit test configuration.

Patches dotenv so pydantic-settings never reads the project's real .env file
during unit tests. Tests control config exclusively through monkeypatch.setenv().

Also provides ``mock_db``: a mongomock database behind the async collection
API the repositories use, so their filters and pipelines run for real.
"""

from contextlib import asynccontextmanager

import mongomock
import pytest


@pytest.fixture(autouse=True)
def disable_dotenv_loading(monkeypatch):
    """Prevent pydantic-settings from loading .env files in all unit tests."""
    import pydantic_settings.sources.providers.dotenv as ps_dotenv

    monkeypatch.setattr(ps_dotenv, "dotenv_values", lambda *a, **kw: {})


# ── mongomock-backed database ────────────────────────────────────────────────


class _AsyncCursor:
    """Awaitable ``to_list`` over a mongomock cursor, as pymongo's async cursor."""

    def __init__(self, cursor):
        self._cursor = cursor

    def sort(self, *args, **kwargs):
        self._cursor = self._cursor.sort(*args, **kwargs)
        return self

    def skip(self, count):
        self._cursor = self._cursor.skip(count)
        return self

    def limit(self, count):
        self._cursor = self._cursor.limit(count)
        return self

    async def to_list(self, length=None):
        docs = list(self._cursor)
        return docs if length is None else docs[:length]


class AsyncCollection:
    """pymongo async collection API over a mongomock collection.

    mongomock has no sessions, so ``session=`` is accepted and dropped; the
    queries and update operators themselves run against real documents.
    """

    def __init__(self, collection):
        self._col = collection

    def find(self, *args, session=None, **kwargs):
        return _AsyncCursor(self._col.find(*args, **kwargs))

    async def aggregate(self, pipeline, *, session=None, **kwargs):
        return _AsyncCursor(self._col.aggregate(pipeline, **kwargs))

    def __getattr__(self, name):
        method = getattr(self._col, name)

        async def _call(*args, session=None, **kwargs):
            return method(*args, **kwargs)

        return _call


class AsyncDatabase:
    def __init__(self, db):
        self._db = db

    def __getitem__(self, name):
        return AsyncCollection(self._db[name])


class _PassThroughSession:
    async def with_transaction(self, callback):
        return await callback(self)


class PassThroughClient:
    """Stands in for AsyncMongoClient when only the transaction shape matters."""

    def __init__(self):
        self.transactions = 0

    @asynccontextmanager
    async def start_session(self):
        self.transactions += 1
        yield _PassThroughSession()


@pytest.fixture
def mock_db():
    return AsyncDatabase(mongomock.MongoClient(tz_aware=True).db)


@pytest.fixture
def mongo_client():
    return PassThroughClient()
