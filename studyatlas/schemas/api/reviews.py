from datetime import datetime
from typing import Literal, Optional
from uuid import UUID

from pydantic import BaseModel, Field


class ReviewCreate(BaseModel):
    rating: int = Field(..., ge=1, le=5)
    difficulty: Optional[str] = None
    workload: Optional[str] = None
    organization: Optional[str] = None
    comment: Optional[str] = Field(None, max_length=5000)


class ReviewUpdate(BaseModel):
    rating: Optional[int] = Field(None, ge=1, le=5)
    difficulty: Optional[str] = None
    workload: Optional[str] = None
    organization: Optional[str] = None
    comment: Optional[str] = Field(None, max_length=5000)


class ReviewDTO(BaseModel):
    id: UUID
    course_id: UUID
    user_id: UUID
    username: Optional[str] = None
    rating: int
    difficulty: Optional[str] = None
    workload: Optional[str] = None
    organization: Optional[str] = None
    comment: Optional[str] = None
    upvote_count: int
    has_upvoted: bool = False
    created_at: datetime
    updated_at: datetime


class RatingSummary(BaseModel):
    course_id: UUID
    average: Optional[float] = Field(None, description="Mean rating, null when the course has no reviews")
    count: int


class UpvoteToggleResponse(BaseModel):
    review_id: UUID
    upvoted: bool
    upvote_count: int


AspectLabel = Literal["Poor", "Fair", "Good", "Excellent"]


class LabReviewCreate(BaseModel):
    rating: int = Field(..., ge=1, le=5)
    research_quality: Optional[AspectLabel] = None
    mentorship: Optional[AspectLabel] = None
    work_environment: Optional[AspectLabel] = None
    comment: Optional[str] = Field(None, max_length=5000)


class LabReviewUpdate(BaseModel):
    rating: Optional[int] = Field(None, ge=1, le=5)
    research_quality: Optional[AspectLabel] = None
    mentorship: Optional[AspectLabel] = None
    work_environment: Optional[AspectLabel] = None
    comment: Optional[str] = Field(None, max_length=5000)


class LabReviewDTO(BaseModel):
    id: UUID
    lab_id: UUID
    user_id: UUID
    username: Optional[str] = None
    rating: int
    research_quality: Optional[str] = None
    mentorship: Optional[str] = None
    work_environment: Optional[str] = None
    comment: Optional[str] = None
    upvote_count: int
    has_upvoted: bool = False
    created_at: datetime
    updated_at: datetime


class LabReviewSummary(BaseModel):
    """Average rating plus the rounded average label of each aspect."""

    lab_id: UUID
    average: Optional[float] = None
    count: int
    research_quality: Optional[AspectLabel] = None
    mentorship: Optional[AspectLabel] = None
    work_environment: Optional[AspectLabel] = None
