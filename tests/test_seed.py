"""
Tests for sample data generation and loading.
"""

import json

import pytest
from pymongo import UpdateOne

from src.db import seed
from src.db.models import Ticket


def test_generate_tickets_is_reproducible():
    first = seed.generate_tickets(50, seed=7)
    second = seed.generate_tickets(50, seed=7)
    assert first == second
    assert len(first) == 50


def test_generated_tickets_are_valid_and_sorted():
    tickets = seed.generate_tickets(30, seed=1)
    times = [t["creationTime"] for t in tickets]
    assert times == sorted(times)
    assert len({t["id"] for t in tickets}) == 30
    for doc in tickets:
        ticket = Ticket.model_validate(doc)
        assert ticket.user_email in seed.REPORTERS
        assert set(ticket.labels) <= set(seed.LABELS)


@pytest.mark.asyncio
async def test_load_seed_upserts_by_id(tmp_path, monkeypatch):
    path = tmp_path / "tickets.json"
    docs = seed.generate_tickets(5, seed=3)
    path.write_text(json.dumps(docs))

    written = []

    class Result:
        upserted_count = 5
        modified_count = 0

    class Collection:
        async def bulk_write(self, operations, ordered=True):
            written.extend(operations)
            return Result()

    class DB:
        tickets = Collection()

    async def fake_get_db():
        return DB()

    async def fake_create_indexes():
        return None

    monkeypatch.setattr(seed, "get_db", fake_get_db)
    monkeypatch.setattr(seed, "create_indexes", fake_create_indexes)

    assert await seed.load_seed(str(path)) == 5
    assert len(written) == 5
    assert written[0] == UpdateOne(
        {"id": docs[0]["id"]},
        {"$set": Ticket.model_validate(docs[0]).model_dump(by_alias=True)},
        upsert=True,
    )


def test_generate_command_writes_file(tmp_path):
    path = tmp_path / "out.json"
    seed.main(["generate", str(path), "--count", "4", "--seed", "2"])
    assert len(json.loads(path.read_text())) == 4
