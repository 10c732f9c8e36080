from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class UserProfileDTO(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    username: Optional[str] = None
    email: Optional[str] = None
    profile_photo_url: Optional[str] = None
    email_public: bool = False
    created_at: Optional[datetime] = None


class UserProfileUpdate(BaseModel):
    username: Optional[str] = Field(None, min_length=2, max_length=50)
    email: Optional[str] = None
    profile_photo_url: Optional[str] = None
    email_public: Optional[bool] = None
