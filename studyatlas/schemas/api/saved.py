from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel

SavedKind = Literal["courses", "labs", "programs"]


class SavedItemDTO(BaseModel):
    id: UUID
    target_id: UUID
    created_at: datetime


class ToggleSaveResponse(BaseModel):
    action: Literal["added", "removed"]
    target_id: UUID
