from src.db.mongo import get_db
from src.core.logging import logger
import pymongo


async def create_indexes():
    """
    Create MongoDB indexes for the ticket listing and dashboard queries.
    """
    db = await get_db()
    tickets = db.tickets

    # Ticket ids from the seed data are unique; seeding upserts on them.
    await tickets.create_index([("id", pymongo.ASCENDING)], unique=True)

    # Listing is always sorted newest first; date qualifiers are range scans.
    await tickets.create_index([("creationTime", pymongo.DESCENDING)])

    # reporter: qualifier
    await tickets.create_index([("userEmail", pymongo.ASCENDING)])

    await tickets.create_index([("labels", pymongo.ASCENDING)])

    logger.info("Ticket indexes ensured")
