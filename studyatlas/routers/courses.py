import logging
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, HTTPException, Query, status

from studyatlas.dependencies import CurrentUserDep, OptionalUserDep, ReviewServiceDep, SessionDep
from studyatlas.exceptions import StudyAtlasException
from studyatlas.repositories.catalog import CourseRepository
from studyatlas.routers.errors import http_error
from studyatlas.schemas.api.catalog import CourseDTO, CourseFilters, CourseListResponse
from studyatlas.schemas.api.reviews import RatingSummary, ReviewCreate, ReviewDTO

router = APIRouter(prefix="/courses", tags=["courses"])
logger = logging.getLogger(__name__)


@router.get("", response_model=CourseListResponse)
def list_courses(
    db: SessionDep,
    search: Optional[str] = Query(None, description="Name, code, description, topics or professor"),
    university_id: Optional[UUID] = None,
    program_id: Optional[UUID] = None,
    language: Optional[str] = None,
    level: Optional[str] = None,
    term: Optional[str] = None,
    ects_min: Optional[float] = Query(None, ge=0),
    ects_max: Optional[float] = Query(None, ge=0),
    exam_type: Optional[str] = None,
    mandatory_optional: Optional[str] = None,
    which_year: Optional[str] = None,
    topics: Optional[List[str]] = Query(None, description="Repeat the parameter to match any of several topics"),
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
):
    filters = CourseFilters(
        search=search,
        university_id=university_id,
        program_id=program_id,
        language=language,
        level=level,
        term=term,
        ects_min=ects_min,
        ects_max=ects_max,
        exam_type=exam_type,
        mandatory_optional=mandatory_optional,
        which_year=which_year,
        topics=topics,
    )
    courses, total = CourseRepository(db).search(filters, limit=limit, offset=offset)
    logger.debug(f"Course search matched {total} rows")
    return CourseListResponse(
        items=[CourseDTO.model_validate(c) for c in courses],
        total=total,
        limit=limit,
        offset=offset,
    )


@router.get("/{course_id}", response_model=CourseDTO)
def get_course(course_id: UUID, db: SessionDep):
    course = CourseRepository(db).get_by_id(course_id)
    if course is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Course {course_id} not found")
    return course


@router.get("/{course_id}/reviews", response_model=List[ReviewDTO])
def list_course_reviews(course_id: UUID, service: ReviewServiceDep, viewer_id: OptionalUserDep):
    try:
        return service.list_reviews(course_id, viewer_id)
    except StudyAtlasException as e:
        raise http_error(e)


@router.get("/{course_id}/rating", response_model=RatingSummary)
def get_course_rating(course_id: UUID, service: ReviewServiceDep):
    try:
        return service.rating_summary(course_id)
    except StudyAtlasException as e:
        raise http_error(e)


@router.post("/{course_id}/reviews", response_model=ReviewDTO, status_code=status.HTTP_201_CREATED)
def create_course_review(
    course_id: UUID,
    payload: ReviewCreate,
    service: ReviewServiceDep,
    user_id: CurrentUserDep,
):
    try:
        return service.create_review(user_id, course_id, payload)
    except StudyAtlasException as e:
        raise http_error(e)
