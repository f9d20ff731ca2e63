"""Feedback endpoints: public submission and administrative management."""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from app.constants import (
    DEFAULT_PAGE,
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
    MSG_FEEDBACK_DELETED,
    MSG_FEEDBACK_STATUS_UPDATED,
    MSG_FEEDBACK_SUBMITTED,
)
from app.core.dependencies import get_feedback_service
from app.core.error_handlers import api_error_handler
from app.schemas.common import BaseResponse, DataResponse, PaginatedResponse
from app.schemas.feedback import FeedbackCreateRequest, FeedbackStatusUpdateRequest, FeedbackSubmitted
from app.services.feedback.service import FeedbackService

router = APIRouter()


@router.post("", response_model=DataResponse, status_code=status.HTTP_201_CREATED)
@api_error_handler("Failed to submit feedback. Please try again later.")
async def create_feedback(
    request: FeedbackCreateRequest,
    service: FeedbackService = Depends(get_feedback_service),
):
    """Submit feedback (public)."""
    submitted = await service.submit(request.name, request.email, request.message)
    return DataResponse(
        message=MSG_FEEDBACK_SUBMITTED,
        data=FeedbackSubmitted(**submitted).model_dump(),
    )


@router.get("", response_model=PaginatedResponse, response_model_exclude_none=True)
@api_error_handler("Failed to fetch feedbacks")
async def list_feedbacks(
    status_filter: Optional[str] = Query(None, alias="status"),
    page: int = Query(DEFAULT_PAGE, ge=1),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    service: FeedbackService = Depends(get_feedback_service),
):
    """List feedback newest first (admin)."""
    result = await service.list(status=status_filter, page=page, limit=limit)
    return PaginatedResponse(**result)


@router.get("/{feedback_id}", response_model=DataResponse, response_model_exclude_none=True)
@api_error_handler("Failed to fetch feedback")
async def get_feedback(
    feedback_id: str,
    service: FeedbackService = Depends(get_feedback_service),
):
    """Get a single feedback record (admin)."""
    feedback = await service.get_by_id(feedback_id)
    return DataResponse(data=feedback.to_response())


@router.patch("/{feedback_id}/status", response_model=DataResponse)
@api_error_handler("Failed to update feedback")
async def update_feedback_status(
    feedback_id: str,
    request: FeedbackStatusUpdateRequest,
    service: FeedbackService = Depends(get_feedback_service),
):
    """Change the handling status of a feedback record (admin)."""
    feedback = await service.update_status(feedback_id, request.status)
    return DataResponse(message=MSG_FEEDBACK_STATUS_UPDATED, data=feedback.to_response())


@router.delete("/{feedback_id}", response_model=BaseResponse)
@api_error_handler("Failed to delete feedback")
async def delete_feedback(
    feedback_id: str,
    service: FeedbackService = Depends(get_feedback_service),
):
    """Delete a feedback record (admin)."""
    await service.delete(feedback_id)
    return BaseResponse(message=MSG_FEEDBACK_DELETED)
