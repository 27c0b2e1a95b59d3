"""
Sample data for local development.

    python -m src.db.seed generate data/seed_tickets.json --count 500
    python -m src.db.seed load data/seed_tickets.json
"""

import argparse
import asyncio
import json
import random
from datetime import datetime, timedelta, timezone
from typing import List

from pymongo import UpdateOne

from src.core.logging import logger
from src.db.indexes import create_indexes
from src.db.models import Ticket
from src.db.mongo import get_db

LABELS = ["xss", "sqli", "csrf", "ssrf", "rce", "idor", "critical", "low", "auth"]
TOPICS = [
    "Reflected XSS in search", "SQL injection in login form", "Missing CSRF token",
    "Open redirect on logout", "Session fixation", "Exposed admin panel",
    "Weak password policy", "IDOR on invoice download", "SSRF via webhook URL",
]
REPORTERS = [f"researcher{i}@example.com" for i in range(1, 16)]


def generate_tickets(count=200, start=None, seed=None) -> List[dict]:
    rng = random.Random(seed)
    start = start or datetime(2024, 1, 1, tzinfo=timezone.utc)

    tickets = []
    for i in range(count):
        created = start + timedelta(days=rng.randint(0, 365), hours=rng.randint(0, 23))
        topic = rng.choice(TOPICS)
        tickets.append({
            "id": f"issue-{i+1:04d}",
            "title": topic,
            "content": f"{topic}. Steps to reproduce are attached. " * rng.randint(1, 4),
            "creationTime": int(created.timestamp() * 1000),
            "userEmail": rng.choice(REPORTERS),
            "labels": rng.sample(LABELS, rng.randint(0, 3)),
        })

    tickets.sort(key=lambda x: x["creationTime"])
    return tickets


async def load_seed(path: str) -> int:
    """Upsert tickets from a JSON file into the tickets collection."""
    with open(path, "r") as f:
        raw = json.load(f)

    operations = []
    for doc in raw:
        ticket = Ticket.model_validate(doc)
        operations.append(UpdateOne(
            {"id": ticket.id},
            {"$set": ticket.model_dump(by_alias=True)},
            upsert=True,
        ))

    if not operations:
        return 0

    await create_indexes()
    db = await get_db()
    result = await db.tickets.bulk_write(operations, ordered=False)
    logger.info(
        f"Seeded {path}: {result.upserted_count} inserted, {result.modified_count} updated"
    )
    return len(operations)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Generate or load sample tickets")
    sub = parser.add_subparsers(dest="command", required=True)

    gen = sub.add_parser("generate")
    gen.add_argument("path")
    gen.add_argument("--count", type=int, default=200)
    gen.add_argument("--seed", type=int, default=None)

    load = sub.add_parser("load")
    load.add_argument("path")

    args = parser.parse_args(argv)
    if args.command == "generate":
        tickets = generate_tickets(args.count, seed=args.seed)
        with open(args.path, "w") as f:
            json.dump(tickets, f, indent=2)
        logger.info(f"Generated {len(tickets)} tickets in {args.path}")
    else:
        asyncio.run(load_seed(args.path))


if __name__ == "__main__":
    main()
