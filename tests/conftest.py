"""
Shared fixtures.

Storage is replaced with an in-memory collection so the suite runs
without MongoDB. The fake records every filter it receives; it does not
evaluate them, so tests assert on the query and on pagination/sorting.
"""

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from src.main import app


class FakeCursor:
    def __init__(self, docs):
        self._docs = list(docs)

    def sort(self, key, direction):
        def sort_key(doc):
            value = doc.get(key)
            return value if isinstance(value, (int, float)) else 0

        self._docs.sort(key=sort_key, reverse=direction < 0)
        return self

    def skip(self, n):
        self._docs = self._docs[n:]
        return self

    def limit(self, n):
        self._docs = self._docs[:n]
        return self

    async def to_list(self, length=None):
        return self._docs[:length] if length else self._docs


class FakeCollection:
    def __init__(self, docs=None):
        self.docs = list(docs or [])
        self.queries = []

    def find(self, query=None, projection=None):
        self.queries.append(query)
        return FakeCursor(self.docs)

    async def count_documents(self, query):
        self.queries.append(query)
        return len(self.docs)


class FakeDB:
    def __init__(self, docs=None):
        self.tickets = FakeCollection(docs)


@pytest.fixture
def fake_db(monkeypatch):
    db = FakeDB()

    async def _get_db():
        return db

    monkeypatch.setattr("src.services.ticket_service.get_db", _get_db)
    return db


@pytest_asyncio.fixture
async def client():
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


def make_ticket(i, email="alice@example.com", labels=None, creation_time=1704067200000, **extra):
    doc = {
        "id": f"issue-{i}",
        "title": f"Issue {i}",
        "content": f"Details for issue {i}",
        "creationTime": creation_time,
        "userEmail": email,
        "labels": labels if labels is not None else [],
    }
    doc.update(extra)
    return doc


@pytest.fixture
def ticket_factory():
    return make_ticket
