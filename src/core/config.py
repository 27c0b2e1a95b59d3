import os
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    MONGO_URL: str = os.getenv("MONGO_URL", "mongodb://mongodb:27017")
    DB_NAME: str = "security_issues"
    LOG_LEVEL: str = "INFO"

    # Ticket listing
    PAGE_SIZE: int = 20
    MAX_PAGE_SIZE: int = 100

    # Dashboard
    TOP_REPORTERS_LIMIT: int = 10
    RECENT_TICKETS_LIMIT: int = 5
    DASHBOARD_MAX_TICKETS: int = 50000
    ANALYTICS_TIME_LIMIT_SECONDS: float = 2.0

    class Config:
        env_file = ".env"

settings = Settings()
