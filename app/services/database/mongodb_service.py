"""
MongoDB service for persistent data storage.
Owns the async client used by the feedback and chat session repositories.
"""

from typing import Optional
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection, AsyncIOMotorDatabase
from pymongo import IndexModel, ASCENDING, DESCENDING
from pymongo.errors import PyMongoError

from app.config.database import MongoDBConfig, get_mongodb_config
from app.utils.logger import get_logger

logger = get_logger(__name__)


class MongoDBService:
    """
    MongoDB service for persistent data storage.
    The database is the only source of truth; nothing is cached in-process.
    """

    def __init__(self, config: Optional[MongoDBConfig] = None):
        self.config = config or get_mongodb_config()
        self.client: Optional[AsyncIOMotorClient] = None
        self.db: Optional[AsyncIOMotorDatabase] = None
        self._initialized = False

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    async def initialize(self):
        """Initialize MongoDB connection and create indexes."""
        if self._initialized:
            return

        try:
            # Create async client
            self.client = AsyncIOMotorClient(**self.config.connection_kwargs)
            self.db = self.client[self.config.DATABASE]

            # Test connection
            await self.client.admin.command('ping')

            # Create indexes
            await self._create_indexes()

            self._initialized = True
            logger.info(f"MongoDB initialized: {self.config.safe_description}/{self.config.DATABASE}")

        except Exception as e:
            logger.error(f"Failed to initialize MongoDB: {e}")
            if self.client is not None:
                self.client.close()
            self.client = None
            self.db = None
            raise

    async def _create_indexes(self):
        """Create indexes for all collections."""
        try:
            feedback = self.db[self.config.COLLECTION_FEEDBACK]
            await feedback.create_indexes([
                IndexModel([("createdAt", DESCENDING)]),
                IndexModel([("status", ASCENDING), ("createdAt", DESCENDING)]),
            ])

            chat_sessions = self.db[self.config.COLLECTION_CHAT_SESSIONS]
            await chat_sessions.create_indexes([
                IndexModel([("createdAt", DESCENDING)]),
            ])

            logger.info("MongoDB indexes created successfully")

        except PyMongoError as e:
            logger.warning(f"Index creation warning (may already exist): {e}")

    def _collection(self, name: str) -> AsyncIOMotorCollection:
        if self.db is None:
            raise RuntimeError("MongoDB service is not initialized")
        return self.db[name]

    @property
    def feedback_collection(self) -> AsyncIOMotorCollection:
        return self._collection(self.config.COLLECTION_FEEDBACK)

    @property
    def chat_sessions_collection(self) -> AsyncIOMotorCollection:
        return self._collection(self.config.COLLECTION_CHAT_SESSIONS)

    # =========================================================================
    # Health Check
    # =========================================================================

    async def health_check(self) -> bool:
        """Check MongoDB connection health."""
        try:
            if not self.client:
                return False
            await self.client.admin.command('ping')
            return True
        except PyMongoError as e:
            logger.error(f"MongoDB health check failed: {e}")
            return False

    async def close(self):
        """Close MongoDB connection."""
        if self.client:
            self.client.close()
            self.client = None
            self.db = None
            self._initialized = False
            logger.info("MongoDB connection closed")


# Global instance
_mongodb_service: Optional[MongoDBService] = None


async def get_mongodb_service() -> MongoDBService:
    """Get the MongoDB service instance."""
    global _mongodb_service
    if _mongodb_service is None:
        _mongodb_service = MongoDBService()
    if not _mongodb_service.is_initialized:
        await _mongodb_service.initialize()
    return _mongodb_service


async def close_mongodb_service():
    """Close the global MongoDB service if it was created."""
    global _mongodb_service
    if _mongodb_service is not None:
        await _mongodb_service.close()
        _mongodb_service = None
