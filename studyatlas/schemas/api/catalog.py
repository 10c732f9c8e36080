from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class UniversityDTO(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    slug: str
    country: Optional[str] = None
    country_code: Optional[str] = None
    website: Optional[str] = None
    logo_url: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None


class UniversityListResponse(BaseModel):
    items: List[UniversityDTO]
    total: int
    limit: int
    offset: int


class ProgramDTO(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    university_id: Optional[UUID] = None
    name: str
    slug: str
    level: Optional[str] = None
    ects_total: Optional[int] = None
    description: Optional[str] = None


class ProgramListResponse(BaseModel):
    items: List[ProgramDTO]
    total: int
    limit: int
    offset: int


class CourseDTO(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    code: Optional[str] = None
    name: str
    description: Optional[str] = None
    ects: Optional[float] = None
    language: Optional[str] = None
    term: Optional[str] = None
    level: Optional[str] = None
    professor_name: Optional[str] = None
    year: Optional[str] = None
    topics: Optional[str] = None
    exam_type: Optional[str] = None
    mandatory_optional: Optional[str] = None
    software_equipment: Optional[str] = None
    which_year: Optional[str] = None


class CourseListResponse(BaseModel):
    items: List[CourseDTO]
    total: int
    limit: int
    offset: int


class CourseFilters(BaseModel):
    """Filters accepted by the course browser."""

    search: Optional[str] = Field(None, description="Matches name, code, description, topics or professor")
    university_id: Optional[UUID] = None
    program_id: Optional[UUID] = None
    language: Optional[str] = None
    level: Optional[str] = Field(None, description="Ba or Ma")
    term: Optional[str] = None
    ects_min: Optional[float] = Field(None, description="Ignored unless greater than 0")
    ects_max: Optional[float] = Field(None, description="Ignored unless lower than 30")
    exam_type: Optional[str] = None
    mandatory_optional: Optional[str] = None
    which_year: Optional[str] = None
    topics: Optional[List[str]] = Field(None, description="Course must carry at least one of these topics")


class LabDTO(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    slug: str
    description: Optional[str] = None
    professors: Optional[str] = None
    topics: Optional[str] = None
    faculty_area: Optional[str] = None
    link: Optional[str] = None
    image_url: Optional[str] = None


class LabListResponse(BaseModel):
    items: List[LabDTO]
    total: int
    limit: int
    offset: int


class LabFilters(BaseModel):
    search: Optional[str] = Field(None, description="Matches lab name or topics")
    university_id: Optional[UUID] = None
    faculty_area: Optional[str] = None


class TeacherDTO(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    full_name: str
    name: Optional[str] = None
    email: Optional[str] = None
    h_index: Optional[int] = None
    citations: Optional[int] = None
    topics: List[str] = []


class TeacherListResponse(BaseModel):
    items: List[TeacherDTO]
    total: int
    limit: int
    offset: int


class TopicDTO(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    description: Optional[str] = None
