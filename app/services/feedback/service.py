"""
Feedback lifecycle: submission, administrator notification, listing,
status transitions and deletion.
"""

from typing import Any, Dict, Optional

from app.config import Settings, get_settings
from app.constants import DEFAULT_PAGE, DEFAULT_PAGE_SIZE, MSG_FEEDBACK_NOT_FOUND
from app.core.error_handlers import service_error_handler
from app.core.exceptions import AppException, NotFoundError
from app.models.feedback import Feedback, validate_feedback_fields, validate_status
from app.repositories.feedback_repository import FeedbackRepository
from app.services.notifications.email_service import EmailService
from app.utils.helpers import total_pages, truncate_text
from app.utils.logger import get_logger

logger = get_logger(__name__)


class FeedbackService:
    """Business operations on feedback records."""

    def __init__(
        self,
        repository: FeedbackRepository,
        email_service: EmailService,
        settings: Optional[Settings] = None,
    ):
        self.repository = repository
        self.email_service = email_service
        self.settings = settings or get_settings()

    @service_error_handler("FeedbackService", "submit")
    async def submit(self, name: Any, email: Any, message: Any) -> Dict[str, Any]:
        """
        Validate and store a submission, then notify the administrator.

        The notification is best-effort: its failure is logged and never
        changes the result, and the stored record is kept either way.

        Returns:
            ``{id, name, email, createdAt}`` of the created record
        """
        fields = validate_feedback_fields(name, email, message)
        feedback = await self.repository.create(**fields)
        logger.info(f"Feedback {feedback.id} stored from {feedback.email}: {truncate_text(feedback.message, 60)!r}")

        await self._notify(feedback)

        return {
            "id": feedback.id,
            "name": feedback.name,
            "email": feedback.email,
            "createdAt": feedback.to_response()["createdAt"],
        }

    async def _notify(self, feedback: Feedback):
        """Send notifications and flag the record; every step may fail independently."""
        try:
            await self.email_service.send_feedback_notification(
                name=feedback.name,
                email=feedback.email,
                message=feedback.message,
                feedback_id=feedback.id,
            )
        except AppException as e:
            logger.error(f"Email sending failed for feedback {feedback.id}: {e.message}")
            return
        except Exception as e:
            logger.error(f"Email sending failed for feedback {feedback.id}: {e}", exc_info=True)
            return

        try:
            await self.repository.mark_email_sent(feedback.id)
        except AppException as e:
            logger.error(f"Could not flag feedback {feedback.id} as emailed: {e.message}")

        if self.settings.SEND_CONFIRMATION_EMAIL:
            try:
                await self.email_service.send_confirmation_email(name=feedback.name, email=feedback.email)
            except Exception as e:
                logger.warning(f"Confirmation email to {feedback.email} failed: {e}")

    @service_error_handler("FeedbackService", "list")
    async def list(
        self,
        status: Optional[str] = None,
        page: int = DEFAULT_PAGE,
        limit: int = DEFAULT_PAGE_SIZE,
    ) -> Dict[str, Any]:
        """
        Get one page of feedback, newest first.

        An unrecognized status simply matches nothing.
        """
        skip = (page - 1) * limit
        records = await self.repository.find_page(status=status, skip=skip, limit=limit)
        total = await self.repository.count(status=status)

        return {
            "data": [record.to_response() for record in records],
            "totalPages": total_pages(total, limit),
            "currentPage": page,
            "total": total,
        }

    @service_error_handler("FeedbackService", "get_by_id")
    async def get_by_id(self, feedback_id: str) -> Feedback:
        """Get one record or raise NotFoundError."""
        feedback = await self.repository.get_by_id(feedback_id)
        if feedback is None:
            raise NotFoundError(MSG_FEEDBACK_NOT_FOUND)
        return feedback

    @service_error_handler("FeedbackService", "update_status")
    async def update_status(self, feedback_id: str, status: Any) -> Feedback:
        """Move a record to a new administrative status."""
        new_status = validate_status(status)
        feedback = await self.repository.update_status(feedback_id, new_status)
        if feedback is None:
            raise NotFoundError(MSG_FEEDBACK_NOT_FOUND)
        logger.info(f"Feedback {feedback_id} status set to {new_status.value}")
        return feedback

    @service_error_handler("FeedbackService", "delete")
    async def delete(self, feedback_id: str):
        """Remove a record or raise NotFoundError."""
        deleted = await self.repository.delete(feedback_id)
        if not deleted:
            raise NotFoundError(MSG_FEEDBACK_NOT_FOUND)
        logger.info(f"Feedback {feedback_id} deleted")
