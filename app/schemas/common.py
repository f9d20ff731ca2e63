"""Common schemas used across the application."""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from app.utils.helpers import utc_now


class BaseResponse(BaseModel):
    """Base response envelope."""

    success: bool = True
    message: Optional[str] = None


class DataResponse(BaseResponse):
    """Envelope carrying a single payload."""

    data: Any = None


class PaginatedResponse(BaseResponse):
    """Paginated response model."""

    data: List[Any]
    totalPages: int
    currentPage: int
    total: int


class HealthCheck(BaseResponse):
    """Health check response."""

    timestamp: datetime = Field(default_factory=utc_now)
    services: Dict[str, str] = {}


class RootInfo(BaseResponse):
    """Service description returned from the root endpoint."""

    version: str
    endpoints: Dict[str, str]
