from datetime import datetime
from typing import List, Literal, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, model_validator

from studyatlas.schemas.diary import SnapGuides

ItemType = Literal["course", "lab", "note", "todo", "text", "module"]
PageType = Literal["semester_planner", "lab_tracker", "notes", "custom", "blank"]


class NotebookCreate(BaseModel):
    name: str = Field("My Semester Planner", min_length=1, max_length=200)


class NotebookUpdate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)


class NotebookDTO(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    name: str
    created_at: datetime
    updated_at: datetime


class PageCreate(BaseModel):
    page_number: Optional[int] = Field(None, ge=0, description="Appended after the last page when omitted")
    page_type: PageType = "semester_planner"
    title: Optional[str] = None
    semester: Optional[str] = None


class PageUpdate(BaseModel):
    page_type: Optional[PageType] = None
    title: Optional[str] = None
    semester: Optional[str] = None


class PageDTO(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    notebook_id: UUID
    page_number: int
    page_type: str
    title: Optional[str] = None
    semester: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class PageOrderEntry(BaseModel):
    id: UUID
    page_number: int = Field(..., ge=0)


class PageReorderRequest(BaseModel):
    pages: List[PageOrderEntry] = Field(..., min_length=1)


class ItemCreate(BaseModel):
    item_type: ItemType
    reference_id: Optional[UUID] = None
    content: Optional[str] = None
    position_x: float = Field(0, ge=0)
    position_y: float = Field(0, ge=0)
    width: float = Field(200, gt=0)
    height: float = Field(100, gt=0)
    color: str = "yellow"
    zone: Optional[str] = None

    @model_validator(mode="after")
    def _reference_required(self):
        if self.item_type in ("course", "lab") and self.reference_id is None:
            raise ValueError(f"{self.item_type} items need a reference_id")
        return self


class ItemUpdate(BaseModel):
    position_x: Optional[float] = Field(None, ge=0)
    position_y: Optional[float] = Field(None, ge=0)
    width: Optional[float] = Field(None, gt=0)
    height: Optional[float] = Field(None, gt=0)
    content: Optional[str] = None
    color: Optional[str] = None
    zone: Optional[str] = None
    is_completed: Optional[bool] = None


class ItemDTO(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    page_id: UUID
    item_type: str
    reference_id: Optional[UUID] = None
    content: Optional[str] = None
    position_x: float
    position_y: float
    width: float
    height: float
    color: str
    zone: Optional[str] = None
    is_completed: bool
    created_at: datetime
    updated_at: datetime


class MoveRequest(BaseModel):
    position_x: float
    position_y: float
    snap: bool = Field(True, description="Snap to page edges, sibling edges and the grid")


class ResizeRequest(BaseModel):
    width: float = Field(..., gt=0)
    height: float = Field(..., gt=0)
    snap: bool = True


class PlacementResponse(BaseModel):
    item: ItemDTO
    guides: SnapGuides


class HistoryActionResponse(BaseModel):
    action: Literal["restored", "removed"]
    item_id: UUID
    item: Optional[ItemDTO] = None
    can_undo: bool
    can_redo: bool
