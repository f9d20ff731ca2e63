"""Service-level tests for the feedback lifecycle."""

import pytest
from bson import ObjectId
from pymongo.errors import OperationFailure

from app.config import Settings
from app.core.exceptions import NotFoundError, PersistenceError, ValidationError
from app.models.feedback import FeedbackStatus
from app.repositories.feedback_repository import FeedbackRepository
from app.services.feedback.service import FeedbackService
from tests.fakes import FakeEmailService


@pytest.mark.asyncio
async def test_submit_returns_summary(feedback_service, email_service):
    result = await feedback_service.submit("Ann", "ann@example.com", "Nice")

    assert set(result) == {"id", "name", "email", "createdAt"}
    assert email_service.notifications[0]["message"] == "Nice"


@pytest.mark.asyncio
async def test_submit_duplicates_are_kept(feedback_service, feedback_collection):
    first = await feedback_service.submit("Ann", "ann@example.com", "Nice")
    second = await feedback_service.submit("Ann", "ann@example.com", "Nice")

    assert first["id"] != second["id"]
    assert len(feedback_collection.documents) == 2


@pytest.mark.asyncio
async def test_submit_invalid_input_writes_nothing(feedback_service, feedback_collection, email_service):
    with pytest.raises(ValidationError):
        await feedback_service.submit("", "ann@example.com", "Nice")

    assert feedback_collection.documents == []
    assert email_service.notifications == []


@pytest.mark.asyncio
async def test_flag_failure_does_not_fail_submission(feedback_collection, email_service):
    class FlagFailingRepository(FeedbackRepository):
        async def mark_email_sent(self, feedback_id):
            raise PersistenceError("FeedbackRepository.mark_email_sent failed", error="write conflict")

    service = FeedbackService(FlagFailingRepository(feedback_collection), email_service, Settings())

    result = await service.submit("Ann", "ann@example.com", "Nice")

    assert result["id"]
    assert feedback_collection.documents[0]["emailSent"] is False


@pytest.mark.asyncio
async def test_confirmation_email_when_enabled(feedback_collection):
    email_service = FakeEmailService()
    settings = Settings(SEND_CONFIRMATION_EMAIL=True)
    service = FeedbackService(FeedbackRepository(feedback_collection), email_service, settings)

    await service.submit("Ann", "ann@example.com", "Nice")

    assert email_service.confirmations == [{"name": "Ann", "email": "ann@example.com"}]


@pytest.mark.asyncio
async def test_confirmation_email_disabled_by_default(feedback_service, email_service):
    await feedback_service.submit("Ann", "ann@example.com", "Nice")

    assert email_service.confirmations == []


@pytest.mark.asyncio
async def test_status_round_trip(feedback_service):
    created = await feedback_service.submit("Ann", "ann@example.com", "Nice")

    updated = await feedback_service.update_status(created["id"], "responded")
    fetched = await feedback_service.get_by_id(created["id"])

    assert updated.status == FeedbackStatus.RESPONDED
    assert fetched.status == FeedbackStatus.RESPONDED
    assert fetched.email_sent is True


@pytest.mark.asyncio
async def test_update_status_validates_before_lookup(feedback_service):
    with pytest.raises(ValidationError):
        await feedback_service.update_status(str(ObjectId()), "done")


@pytest.mark.asyncio
async def test_missing_records_raise_not_found(feedback_service):
    missing = str(ObjectId())

    with pytest.raises(NotFoundError):
        await feedback_service.get_by_id(missing)
    with pytest.raises(NotFoundError):
        await feedback_service.update_status(missing, "read")
    with pytest.raises(NotFoundError):
        await feedback_service.delete(missing)


@pytest.mark.asyncio
async def test_list_on_storage_failure(feedback_service, feedback_collection):
    feedback_collection.error = OperationFailure("not authorized")

    with pytest.raises(PersistenceError) as exc_info:
        await feedback_service.list()

    assert exc_info.value.error == "not authorized"
