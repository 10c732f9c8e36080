from datetime import datetime
from typing import Any, Dict, List, Literal, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from studyatlas.schemas.gateway import ChatMessage


class ConversationCreate(BaseModel):
    title: str = Field("New Conversation", min_length=1, max_length=200)


class ConversationUpdate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)


class ConversationDTO(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    title: str
    created_at: datetime
    updated_at: datetime


class MessageDTO(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    conversation_id: UUID
    role: Literal["user", "assistant"]
    content: str
    feedback: Optional[Literal["positive", "negative"]] = None
    feedback_at: Optional[datetime] = None
    created_at: datetime


class SendMessageRequest(BaseModel):
    content: str = Field(..., min_length=1, max_length=20000)
    user_context: Optional[Dict[str, Any]] = Field(
        None, description="Saved courses, level, interests... forwarded to the advisor prompt"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "content": "Which machine learning courses fit a winter exchange semester?",
                "user_context": {"academic_level": "Ma", "interests": ["machine learning"]},
            }
        }


class SendMessageResponse(BaseModel):
    user_message: MessageDTO
    assistant_message: MessageDTO


class StreamChatRequest(BaseModel):
    messages: List[ChatMessage] = Field(..., min_length=1)
    conversation_id: Optional[UUID] = Field(
        None, description="When set, the last user message and the full reply are stored"
    )
    user_context: Optional[Dict[str, Any]] = None


class FeedbackRequest(BaseModel):
    feedback: Optional[Literal["positive", "negative"]] = None


DraftStatus = Literal["draft", "sent", "replied", "follow_up"]


class EmailDraftGenerateRequest(BaseModel):
    purpose: str = Field(..., min_length=1, max_length=2000)
    recipient: str = Field(..., min_length=1, max_length=300)
    context: Optional[str] = Field(None, max_length=5000)
    lab_id: Optional[UUID] = None


class EmailDraftUpdate(BaseModel):
    subject: Optional[str] = None
    body: Optional[str] = None
    status: Optional[DraftStatus] = None


class EmailDraftDTO(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    lab_id: Optional[UUID] = None
    recipient: str
    purpose: Optional[str] = None
    subject: str
    body: str
    status: str
    created_at: datetime
    updated_at: datetime
