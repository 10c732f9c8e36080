"""Value types for diary canvas geometry and analytics."""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class Rect(BaseModel):
    """Axis-aligned box on a diary page, in canvas pixels."""

    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def center_x(self) -> float:
        return self.x + self.width / 2

    @property
    def center_y(self) -> float:
        return self.y + self.height / 2


class PageBounds(BaseModel):
    width: float
    height: float


class SnapGuides(BaseModel):
    """Alignment lines shown while an item is dragged."""

    vertical: List[float] = Field(default_factory=list)
    horizontal: List[float] = Field(default_factory=list)


class ExamTypeCounts(BaseModel):
    written: int = 0
    oral: int = 0
    during_semester: int = 0
    other: int = 0


class LevelCounts(BaseModel):
    bachelor: int = 0
    master: int = 0


class TermCounts(BaseModel):
    winter: int = 0
    summer: int = 0


class SemesterAnalytics(BaseModel):
    total_ects: float = 0
    exam_types: ExamTypeCounts = Field(default_factory=ExamTypeCounts)
    levels: LevelCounts = Field(default_factory=LevelCounts)
    terms: TermCounts = Field(default_factory=TermCounts)
    topics: List[str] = Field(default_factory=list)
    software: List[str] = Field(default_factory=list)


class ItemSnapshot(BaseModel):
    """Everything needed to recreate a removed diary item."""

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
    is_completed: bool = False
    created_at: Optional[datetime] = None
