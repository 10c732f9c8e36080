from studyatlas.schemas.api.catalog import (
    CourseDTO,
    CourseFilters,
    CourseListResponse,
    LabDTO,
    LabFilters,
    LabListResponse,
    ProgramDTO,
    ProgramListResponse,
    TeacherDTO,
    TeacherListResponse,
    TopicDTO,
    UniversityDTO,
    UniversityListResponse,
)
from studyatlas.schemas.api.reviews import (
    LabReviewCreate,
    LabReviewDTO,
    LabReviewSummary,
    LabReviewUpdate,
    RatingSummary,
    ReviewCreate,
    ReviewDTO,
    ReviewUpdate,
    UpvoteToggleResponse,
)
from studyatlas.schemas.api.saved import SavedItemDTO, ToggleSaveResponse
from studyatlas.schemas.api.statistics import CountEntry, StatisticsResponse

__all__ = [
    "CountEntry",
    "CourseDTO",
    "CourseFilters",
    "CourseListResponse",
    "LabDTO",
    "LabFilters",
    "LabListResponse",
    "LabReviewCreate",
    "LabReviewDTO",
    "LabReviewSummary",
    "LabReviewUpdate",
    "ProgramDTO",
    "ProgramListResponse",
    "RatingSummary",
    "ReviewCreate",
    "ReviewDTO",
    "ReviewUpdate",
    "SavedItemDTO",
    "StatisticsResponse",
    "TeacherDTO",
    "TeacherListResponse",
    "ToggleSaveResponse",
    "TopicDTO",
    "UniversityDTO",
    "UniversityListResponse",
    "UpvoteToggleResponse",
]
