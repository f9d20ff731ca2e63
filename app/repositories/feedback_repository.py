"""
Repository for feedback database operations.
"""

from typing import List, Optional

from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo import DESCENDING

from app.constants import DEFAULT_FEEDBACK_STATUS
from app.core.error_handlers import repository_error_handler
from app.models.feedback import Feedback, FeedbackStatus, feedback_from_document
from app.repositories.base import BaseRepository
from app.utils.helpers import utc_now


class FeedbackRepository(BaseRepository):
    """Repository for feedback operations."""

    def __init__(self, collection: AsyncIOMotorCollection):
        super().__init__(collection)

    @repository_error_handler("FeedbackRepository", "create")
    async def create(self, name: str, email: str, message: str) -> Feedback:
        """
        Store a new feedback message with default status and flags.

        Args:
            name: Normalized submitter name
            email: Normalized submitter email
            message: Normalized message body

        Returns:
            The stored feedback record
        """
        now = utc_now()
        document = await self._insert({
            "name": name,
            "email": email,
            "message": message,
            "status": DEFAULT_FEEDBACK_STATUS,
            "emailSent": False,
            "createdAt": now,
            "updatedAt": now,
        })
        return feedback_from_document(document)

    @repository_error_handler("FeedbackRepository", "get_by_id")
    async def get_by_id(self, feedback_id: str) -> Optional[Feedback]:
        """Get feedback by ID."""
        return feedback_from_document(await self._find_by_id(feedback_id))

    @repository_error_handler("FeedbackRepository", "find_page")
    async def find_page(self, status: Optional[str], skip: int, limit: int) -> List[Feedback]:
        """
        Get one page of feedback, newest first.

        Args:
            status: Exact status to filter on, or None for all
            skip: Number of records to skip
            limit: Maximum number of records to return

        Returns:
            List of feedback records
        """
        documents = await self._find(
            self._status_query(status),
            sort=[("createdAt", DESCENDING)],
            skip=skip,
            limit=limit,
        )
        return [feedback_from_document(document) for document in documents]

    @repository_error_handler("FeedbackRepository", "count")
    async def count(self, status: Optional[str] = None) -> int:
        """Count feedback, optionally restricted to one status."""
        return await self._count(self._status_query(status))

    @repository_error_handler("FeedbackRepository", "update_status")
    async def update_status(self, feedback_id: str, status: FeedbackStatus) -> Optional[Feedback]:
        """Set a new status. Returns the updated record, or None if not found."""
        document = await self._update_by_id(
            feedback_id,
            {"status": status.value, "updatedAt": utc_now()},
        )
        return feedback_from_document(document)

    @repository_error_handler("FeedbackRepository", "mark_email_sent")
    async def mark_email_sent(self, feedback_id: str) -> Optional[Feedback]:
        """Record that the administrator notification went out."""
        document = await self._update_by_id(
            feedback_id,
            {"emailSent": True, "updatedAt": utc_now()},
        )
        return feedback_from_document(document)

    @repository_error_handler("FeedbackRepository", "delete")
    async def delete(self, feedback_id: str) -> bool:
        """Delete feedback by ID. Returns True if deleted, False if not found."""
        return await self._delete_by_id(feedback_id)

    @staticmethod
    def _status_query(status: Optional[str]) -> dict:
        return {"status": status} if status else {}
