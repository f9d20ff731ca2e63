"""
Repository for chat session database operations.
"""

from typing import Any, Dict

from motor.motor_asyncio import AsyncIOMotorCollection

from app.core.error_handlers import repository_error_handler
from app.models.chat_session import ChatSession, chat_session_from_document
from app.repositories.base import BaseRepository
from app.utils.helpers import utc_now


class ChatSessionRepository(BaseRepository):
    """Repository for chat session operations. Sessions are never updated or deleted."""

    def __init__(self, collection: AsyncIOMotorCollection):
        super().__init__(collection)

    @repository_error_handler("ChatSessionRepository", "create")
    async def create(self, document: Dict[str, Any]) -> ChatSession:
        """
        Store a validated chat session.

        Args:
            document: Output of validate_session_input

        Returns:
            The stored session including id and createdAt
        """
        stored = await self._insert({**document, "createdAt": utc_now()})
        return chat_session_from_document(stored)

