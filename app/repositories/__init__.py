"""
Repository layer for database access.
Implements the Repository pattern for clean separation of concerns.
"""

from app.repositories.chat_session_repository import ChatSessionRepository
from app.repositories.feedback_repository import FeedbackRepository

__all__ = [
    "ChatSessionRepository",
    "FeedbackRepository",
]
