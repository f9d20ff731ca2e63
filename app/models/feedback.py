"""
Feedback document model and field validation.

Validation runs before every write, independently of any constraints the
document store enforces, so the same rules hold whatever backs the repository.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from app.constants import (
    EMAIL_MAX_LENGTH,
    EMAIL_PATTERN,
    FEEDBACK_STATUSES,
    MESSAGE_MAX_LENGTH,
    MSG_FEEDBACK_MISSING_FIELDS,
    MSG_INVALID_STATUS,
    NAME_MAX_LENGTH,
)
from app.core.exceptions import ValidationError
from app.utils.helpers import ensure_utc


class FeedbackStatus(str, Enum):
    """Administrative handling state of a feedback message."""

    PENDING = "pending"
    READ = "read"
    RESPONDED = "responded"


class Feedback(BaseModel):
    """A stored feedback message. Serialized with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    name: str = Field(..., min_length=1, max_length=NAME_MAX_LENGTH)
    email: str = Field(..., min_length=1)
    message: str = Field(..., min_length=1, max_length=MESSAGE_MAX_LENGTH)
    status: FeedbackStatus = FeedbackStatus.PENDING
    email_sent: bool = False
    created_at: datetime
    updated_at: datetime

    @field_validator("email")
    @classmethod
    def validate_email_shape(cls, v: str) -> str:
        if not is_valid_email(v):
            raise ValueError("Please provide a valid email address")
        return v

    @field_validator("created_at", "updated_at")
    @classmethod
    def validate_timestamps(cls, v: datetime) -> datetime:
        return ensure_utc(v)

    def to_response(self) -> Dict[str, Any]:
        """JSON-ready representation returned by the API."""
        return self.model_dump(mode="json", by_alias=True)


def is_valid_email(value: str) -> bool:
    """Length-capped address check; over-long input is rejected before matching."""
    return len(value) <= EMAIL_MAX_LENGTH and EMAIL_PATTERN.match(value) is not None


def find_missing_fields(name: Any, email: Any, message: Any) -> List[str]:
    """Names of required submission fields that are absent or empty (before trimming)."""
    submitted = {"name": name, "email": email, "message": message}
    return [field for field, value in submitted.items() if not value]


def validate_feedback_fields(name: Any, email: Any, message: Any) -> Dict[str, str]:
    """
    Validate and normalize a feedback submission.

    Returns the normalized fields (trimmed, lower-cased email) or raises
    ValidationError naming the offending fields.
    """
    missing = find_missing_fields(name, email, message)
    if missing:
        raise ValidationError(MSG_FEEDBACK_MISSING_FIELDS, fields=missing)

    non_text = [field for field, value in (("name", name), ("email", email), ("message", message))
                if not isinstance(value, str)]
    if non_text:
        raise ValidationError("Name, email, and message must be text", fields=non_text)

    normalized = {
        "name": name.strip(),
        "email": email.strip().lower(),
        "message": message.strip(),
    }

    errors: Dict[str, str] = {}
    if not normalized["name"]:
        errors["name"] = "Name is required"
    elif len(normalized["name"]) > NAME_MAX_LENGTH:
        errors["name"] = f"Name cannot exceed {NAME_MAX_LENGTH} characters"

    if not normalized["email"]:
        errors["email"] = "Email is required"
    elif not is_valid_email(normalized["email"]):
        errors["email"] = "Please provide a valid email address"

    if not normalized["message"]:
        errors["message"] = "Message is required"
    elif len(normalized["message"]) > MESSAGE_MAX_LENGTH:
        errors["message"] = f"Message cannot exceed {MESSAGE_MAX_LENGTH} characters"

    if errors:
        raise ValidationError(
            "; ".join(errors.values()),
            fields=list(errors),
            details={"errors": errors},
        )

    return normalized


def validate_status(value: Any) -> FeedbackStatus:
    """Parse an administrative status value or raise ValidationError."""
    if value not in FEEDBACK_STATUSES:
        raise ValidationError(MSG_INVALID_STATUS, fields=["status"])
    return FeedbackStatus(value)


def feedback_from_document(document: Optional[Dict[str, Any]]) -> Optional[Feedback]:
    """Build a Feedback from a raw MongoDB document (``_id`` → ``id``)."""
    if document is None:
        return None
    data = dict(document)
    data["id"] = str(data.pop("_id"))
    return Feedback.model_validate(data)
