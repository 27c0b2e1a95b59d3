from motor.motor_asyncio import AsyncIOMotorClient
from src.core.config import settings

_client = None

async def get_db():
    """
    Returns a database instance.
    """
    global _client
    if _client is None:
        _client = AsyncIOMotorClient(settings.MONGO_URL)
    return _client[settings.DB_NAME]
