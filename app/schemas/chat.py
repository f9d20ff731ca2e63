"""Chat session request schemas."""

from typing import Any, Optional

from pydantic import BaseModel, Field


class ChatSessionRequest(BaseModel):
    """Recorded conversation plus optional survey answers, validated by the recorder."""

    messages: Optional[Any] = Field(None, description="Ordered list of {sender, text, timestamp?}")
    feedback: Optional[Any] = Field(None, description="Optional {isAccurate, isFast, wouldUseAgain, rating, comments}")
