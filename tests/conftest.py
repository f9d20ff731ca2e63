"""Shared fixtures. Environment is fixed before the application is imported."""

import os
import tempfile

os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("CLIENT_URL", "https://chat.example.com/")
os.environ.setdefault("ALLOWED_ORIGINS", "http://localhost:5173")
os.environ.setdefault("LOG_FILE", os.path.join(tempfile.gettempdir(), "feedback_api_test.log"))
os.environ.setdefault("ENABLE_METRICS", "true")

import pytest
from fastapi.testclient import TestClient

from app.config import get_settings
from app.core.dependencies import (
    get_chat_session_repository,
    get_database_status,
    get_email_service_dep,
    get_feedback_repository,
)
from app.main import app
from app.repositories.chat_session_repository import ChatSessionRepository
from app.repositories.feedback_repository import FeedbackRepository
from app.services.chat.recorder import ChatSessionRecorder
from app.services.feedback.service import FeedbackService
from tests.fakes import FakeCollection, FakeEmailService


@pytest.fixture
def feedback_collection():
    return FakeCollection()


@pytest.fixture
def chat_collection():
    return FakeCollection()


@pytest.fixture
def email_service():
    return FakeEmailService()


@pytest.fixture
def feedback_service(feedback_collection, email_service):
    return FeedbackService(FeedbackRepository(feedback_collection), email_service, get_settings())


@pytest.fixture
def recorder(chat_collection):
    return ChatSessionRecorder(ChatSessionRepository(chat_collection))


@pytest.fixture
def client(feedback_collection, chat_collection, email_service):
    app.dependency_overrides[get_feedback_repository] = lambda: FeedbackRepository(feedback_collection)
    app.dependency_overrides[get_chat_session_repository] = lambda: ChatSessionRepository(chat_collection)
    app.dependency_overrides[get_email_service_dep] = lambda: email_service
    app.dependency_overrides[get_database_status] = lambda: "healthy"
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.clear()
