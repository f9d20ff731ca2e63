"""Chat session recorder."""

from typing import Any

from app.core.error_handlers import service_error_handler
from app.models.chat_session import ChatSession, validate_session_input
from app.repositories.chat_session_repository import ChatSessionRepository
from app.utils.logger import get_logger

logger = get_logger(__name__)


class ChatSessionRecorder:
    """Validates and stores chat transcripts with optional survey feedback."""

    def __init__(self, repository: ChatSessionRepository):
        self.repository = repository

    @service_error_handler("ChatSessionRecorder", "save_session")
    async def save_session(self, messages: Any, feedback: Any = None) -> ChatSession:
        """Store one conversation. Raises ValidationError on malformed input."""
        document = validate_session_input(messages, feedback)
        session = await self.repository.create(document)
        logger.info(
            f"Chat session {session.id} saved with {len(session.messages)} messages"
            f"{' and feedback' if session.feedback else ''}"
        )
        return session
