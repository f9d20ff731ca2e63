"""
Chat session document model and validation.
"""

from datetime import datetime
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictInt, field_validator
from pydantic import ValidationError as PydanticValidationError

from app.constants import MSG_CHAT_INVALID_MESSAGES, RATING_MAX, RATING_MIN
from app.core.exceptions import ValidationError
from app.utils.helpers import ensure_utc, utc_now

SurveyAnswer = Literal["yes", "no"]


class ChatMessage(BaseModel):
    """One turn of a recorded conversation."""

    sender: Literal["user", "bot"]
    text: str = Field(..., min_length=1)
    timestamp: datetime = Field(default_factory=utc_now)

    @field_validator("timestamp")
    @classmethod
    def validate_timestamp(cls, v: datetime) -> datetime:
        return ensure_utc(v)


class SessionFeedback(BaseModel):
    """Optional survey answers attached to a chat session."""

    model_config = ConfigDict(extra="ignore")

    isAccurate: Optional[SurveyAnswer] = None
    isFast: Optional[SurveyAnswer] = None
    wouldUseAgain: Optional[SurveyAnswer] = None
    rating: Optional[StrictInt] = Field(None, ge=RATING_MIN, le=RATING_MAX)
    comments: Optional[str] = None


class ChatSession(BaseModel):
    """A stored chat session."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    messages: List[ChatMessage]
    feedback: Optional[SessionFeedback] = None
    created_at: datetime = Field(..., alias="createdAt")

    @field_validator("created_at")
    @classmethod
    def validate_created_at(cls, v: datetime) -> datetime:
        return ensure_utc(v)

    def to_response(self) -> Dict[str, Any]:
        """JSON-ready representation returned by the API."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


def _pydantic_errors(exc: PydanticValidationError, prefix: str) -> Dict[str, str]:
    errors = {}
    for error in exc.errors():
        location = ".".join(str(part) for part in (prefix, *error["loc"]))
        errors[location] = error["msg"]
    return errors


def validate_session_input(messages: Any, feedback: Any = None) -> Dict[str, Any]:
    """
    Validate a chat session submission.

    Returns the document to store (messages with timestamps, feedback with
    unset answers dropped) or raises ValidationError.
    """
    if not isinstance(messages, list):
        raise ValidationError(MSG_CHAT_INVALID_MESSAGES, fields=["messages"])

    errors: Dict[str, str] = {}
    validated_messages = []
    for index, raw in enumerate(messages):
        try:
            validated_messages.append(ChatMessage.model_validate(raw))
        except PydanticValidationError as e:
            errors.update(_pydantic_errors(e, f"messages.{index}"))

    validated_feedback = None
    if feedback is not None:
        try:
            validated_feedback = SessionFeedback.model_validate(feedback)
        except PydanticValidationError as e:
            errors.update(_pydantic_errors(e, "feedback"))

    if errors:
        raise ValidationError(
            "Chat session validation failed",
            fields=sorted({location.split(".")[0] for location in errors}),
            details={"errors": errors},
        )

    document: Dict[str, Any] = {
        "messages": [message.model_dump() for message in validated_messages],
    }
    if validated_feedback is not None:
        document["feedback"] = validated_feedback.model_dump(exclude_none=True)
    return document


def chat_session_from_document(document: Optional[Dict[str, Any]]) -> Optional[ChatSession]:
    """Build a ChatSession from a raw MongoDB document (``_id`` → ``id``)."""
    if document is None:
        return None
    data = dict(document)
    data["id"] = str(data.pop("_id"))
    return ChatSession.model_validate(data)
