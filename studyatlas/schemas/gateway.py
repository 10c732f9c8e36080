"""Pydantic models for model gateway payloads."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class ChatMessage(BaseModel):
    model_config = ConfigDict(extra="forbid")

    role: Literal["system", "user", "assistant"]
    content: str = Field(..., min_length=1)


class EmailDraftContent(BaseModel):
    """Structured email the gateway is asked to return."""

    subject: str
    body: str
