"""
Database configuration for the MongoDB document store.
"""

from typing import Any, Dict, Optional
from pydantic_settings import BaseSettings


class MongoDBConfig(BaseSettings):
    """MongoDB configuration for feedback and chat session storage."""

    # Full connection string (from .env, MONGODB_URI). Takes precedence over host/port.
    URI: Optional[str] = None

    # Connection Settings (from .env)
    HOST: str = "localhost"
    PORT: int = 27017
    DATABASE: str = "feedback"
    USERNAME: str = ""
    PASSWORD: str = ""

    # Collections
    COLLECTION_FEEDBACK: str = "feedbacks"
    COLLECTION_CHAT_SESSIONS: str = "chatsessions"

    # Connection pool settings
    MAX_POOL_SIZE: int = 100
    MIN_POOL_SIZE: int = 0
    SERVER_SELECTION_TIMEOUT: int = 5000
    CONNECT_TIMEOUT: int = 10000

    @property
    def connection_uri(self) -> str:
        """Get MongoDB connection URI."""
        if self.URI:
            return self.URI
        if self.USERNAME and self.PASSWORD:
            return f"mongodb://{self.USERNAME}:{self.PASSWORD}@{self.HOST}:{self.PORT}/{self.DATABASE}?authSource=admin"
        return f"mongodb://{self.HOST}:{self.PORT}"

    @property
    def connection_kwargs(self) -> Dict[str, Any]:
        """Get connection kwargs for MongoDB client."""
        return {
            "host": self.connection_uri,
            "maxPoolSize": self.MAX_POOL_SIZE,
            "minPoolSize": self.MIN_POOL_SIZE,
            "serverSelectionTimeoutMS": self.SERVER_SELECTION_TIMEOUT,
            "connectTimeoutMS": self.CONNECT_TIMEOUT,
            "tz_aware": True,
        }

    @property
    def safe_description(self) -> str:
        """Connection target without credentials, for logs."""
        if self.URI:
            return self.URI.rsplit("@", 1)[-1]
        return f"{self.HOST}:{self.PORT}"

    class Config:
        env_file = ".env"
        env_prefix = "MONGODB_"
        extra = "ignore"
        frozen = True


_mongodb_config: Optional[MongoDBConfig] = None


def get_mongodb_config() -> MongoDBConfig:
    """Get MongoDB configuration (loaded once per process)."""
    global _mongodb_config
    if _mongodb_config is None:
        _mongodb_config = MongoDBConfig()
    return _mongodb_config
