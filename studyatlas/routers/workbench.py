import logging
from typing import List
from uuid import UUID

from fastapi import APIRouter, status
from fastapi.responses import StreamingResponse

from studyatlas.dependencies import CurrentUserDep, WorkbenchServiceDep
from studyatlas.exceptions import StudyAtlasException
from studyatlas.routers.errors import http_error
from studyatlas.schemas.api.workbench import (
    ConversationCreate,
    ConversationDTO,
    ConversationUpdate,
    EmailDraftDTO,
    EmailDraftGenerateRequest,
    EmailDraftUpdate,
    FeedbackRequest,
    MessageDTO,
    SendMessageRequest,
    SendMessageResponse,
    StreamChatRequest,
)

router = APIRouter(prefix="/workbench", tags=["workbench"])
logger = logging.getLogger(__name__)


# ---- Conversations ----


@router.get("/conversations", response_model=List[ConversationDTO])
def list_conversations(service: WorkbenchServiceDep, user_id: CurrentUserDep):
    return service.list_conversations(user_id)


@router.post("/conversations", response_model=ConversationDTO, status_code=status.HTTP_201_CREATED)
def create_conversation(payload: ConversationCreate, service: WorkbenchServiceDep, user_id: CurrentUserDep):
    return service.create_conversation(user_id, payload.title)


@router.patch("/conversations/{conversation_id}", response_model=ConversationDTO)
def rename_conversation(
    conversation_id: UUID, payload: ConversationUpdate, service: WorkbenchServiceDep, user_id: CurrentUserDep
):
    try:
        return service.rename_conversation(user_id, conversation_id, payload.title)
    except StudyAtlasException as e:
        raise http_error(e)


@router.delete("/conversations/{conversation_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_conversation(conversation_id: UUID, service: WorkbenchServiceDep, user_id: CurrentUserDep):
    try:
        service.delete_conversation(user_id, conversation_id)
    except StudyAtlasException as e:
        raise http_error(e)


@router.get("/conversations/{conversation_id}/messages", response_model=List[MessageDTO])
def list_messages(conversation_id: UUID, service: WorkbenchServiceDep, user_id: CurrentUserDep):
    try:
        return service.list_messages(user_id, conversation_id)
    except StudyAtlasException as e:
        raise http_error(e)


@router.post("/conversations/{conversation_id}/messages", response_model=SendMessageResponse)
def send_message(
    conversation_id: UUID, payload: SendMessageRequest, service: WorkbenchServiceDep, user_id: CurrentUserDep
):
    """Ask the study advisor and store both turns."""
    try:
        user_message, assistant_message = service.send_message(
            user_id, conversation_id, payload.content, payload.user_context
        )
    except StudyAtlasException as e:
        raise http_error(e)
    return SendMessageResponse(
        user_message=MessageDTO.model_validate(user_message),
        assistant_message=MessageDTO.model_validate(assistant_message),
    )


@router.put("/messages/{message_id}/feedback", response_model=MessageDTO)
def set_message_feedback(message_id: UUID, payload: FeedbackRequest, service: WorkbenchServiceDep, user_id: CurrentUserDep):
    try:
        return service.set_feedback(user_id, message_id, payload.feedback)
    except StudyAtlasException as e:
        raise http_error(e)


@router.post("/chat/stream")
def stream_chat(payload: StreamChatRequest, service: WorkbenchServiceDep, user_id: CurrentUserDep):
    """Stream the advisor reply as server-sent events, ending with ``data: [DONE]``."""
    try:
        events = service.stream_reply(user_id, payload)
    except StudyAtlasException as e:
        raise http_error(e)
    return StreamingResponse(
        events,
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache", "X-Accel-Buffering": "no"},
    )


# ---- Email drafts ----


@router.get("/email-drafts", response_model=List[EmailDraftDTO])
def list_email_drafts(service: WorkbenchServiceDep, user_id: CurrentUserDep):
    return service.list_drafts(user_id)


@router.post("/email-drafts/generate", response_model=EmailDraftDTO, status_code=status.HTTP_201_CREATED)
def generate_email_draft(payload: EmailDraftGenerateRequest, service: WorkbenchServiceDep, user_id: CurrentUserDep):
    try:
        return service.generate_draft(user_id, payload)
    except StudyAtlasException as e:
        raise http_error(e)


@router.get("/email-drafts/{draft_id}", response_model=EmailDraftDTO)
def get_email_draft(draft_id: UUID, service: WorkbenchServiceDep, user_id: CurrentUserDep):
    try:
        return service.get_draft(user_id, draft_id)
    except StudyAtlasException as e:
        raise http_error(e)


@router.patch("/email-drafts/{draft_id}", response_model=EmailDraftDTO)
def update_email_draft(
    draft_id: UUID, payload: EmailDraftUpdate, service: WorkbenchServiceDep, user_id: CurrentUserDep
):
    try:
        return service.update_draft(user_id, draft_id, payload)
    except StudyAtlasException as e:
        raise http_error(e)


@router.delete("/email-drafts/{draft_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_email_draft(draft_id: UUID, service: WorkbenchServiceDep, user_id: CurrentUserDep):
    try:
        service.delete_draft(user_id, draft_id)
    except StudyAtlasException as e:
        raise http_error(e)
