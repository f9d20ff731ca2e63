"""Chat session logging endpoint."""

from fastapi import APIRouter, Depends, status

from app.constants import MSG_CHAT_SAVED
from app.core.dependencies import get_chat_session_recorder
from app.core.error_handlers import api_error_handler
from app.schemas.chat import ChatSessionRequest
from app.schemas.common import DataResponse
from app.services.chat.recorder import ChatSessionRecorder

router = APIRouter()


@router.post("", response_model=DataResponse, status_code=status.HTTP_201_CREATED)
@api_error_handler("Failed to save chat session")
async def save_chat_session(
    request: ChatSessionRequest,
    recorder: ChatSessionRecorder = Depends(get_chat_session_recorder),
):
    """Store a chat transcript with optional survey feedback."""
    session = await recorder.save_session(request.messages, request.feedback)
    return DataResponse(message=MSG_CHAT_SAVED, data=session.to_response())
