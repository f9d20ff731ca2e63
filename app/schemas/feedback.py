"""Feedback request/response schemas."""

from typing import Any, Optional

from pydantic import BaseModel, Field


class FeedbackCreateRequest(BaseModel):
    """Public feedback submission. Presence is checked by the service so it can name missing fields."""

    name: Optional[Any] = Field(None, description="Submitter name (max 100 characters)")
    email: Optional[Any] = Field(None, description="Submitter email address")
    message: Optional[Any] = Field(None, description="Feedback message (max 1000 characters)")


class FeedbackStatusUpdateRequest(BaseModel):
    """Administrative status change."""

    status: Optional[Any] = Field(None, description="'pending', 'read' or 'responded'")


class FeedbackSubmitted(BaseModel):
    """Echo of a stored submission. The message body is not returned."""

    id: str
    name: str
    email: str
    createdAt: str
