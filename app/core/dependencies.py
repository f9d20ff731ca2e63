"""
FastAPI dependency providers for services and settings.
"""

from fastapi import Depends
from pymongo.errors import PyMongoError

from app.config import Settings, get_settings
from app.core.exceptions import PersistenceError
from app.repositories.chat_session_repository import ChatSessionRepository
from app.repositories.feedback_repository import FeedbackRepository
from app.services.chat.recorder import ChatSessionRecorder
from app.services.database.mongodb_service import MongoDBService, get_mongodb_service
from app.services.feedback.service import FeedbackService
from app.services.notifications.email_service import EmailService, get_email_service


async def get_current_settings() -> Settings:
    """Get current application settings."""
    return get_settings()


async def get_mongodb_service_dep() -> MongoDBService:
    """Get the connected MongoDB service."""
    try:
        return await get_mongodb_service()
    except PyMongoError as e:
        raise PersistenceError("Database unavailable", error=str(e)) from e


async def get_feedback_repository(
    mongodb: MongoDBService = Depends(get_mongodb_service_dep)
) -> FeedbackRepository:
    return FeedbackRepository(mongodb.feedback_collection)


async def get_chat_session_repository(
    mongodb: MongoDBService = Depends(get_mongodb_service_dep)
) -> ChatSessionRepository:
    return ChatSessionRepository(mongodb.chat_sessions_collection)


async def get_email_service_dep() -> EmailService:
    return get_email_service()


async def get_feedback_service(
    repository: FeedbackRepository = Depends(get_feedback_repository),
    email_service: EmailService = Depends(get_email_service_dep),
    settings: Settings = Depends(get_current_settings),
) -> FeedbackService:
    """Feedback lifecycle service bound to the current collaborators."""
    return FeedbackService(repository, email_service, settings)


async def get_chat_session_recorder(
    repository: ChatSessionRepository = Depends(get_chat_session_repository),
) -> ChatSessionRecorder:
    """Chat session recorder bound to the current repository."""
    return ChatSessionRecorder(repository)


async def get_database_status() -> str:
    """Report MongoDB reachability without failing the caller."""
    try:
        mongodb = await get_mongodb_service()
    except PyMongoError:
        return "unhealthy"
    return "healthy" if await mongodb.health_check() else "unhealthy"
