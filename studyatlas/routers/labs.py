import logging
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, HTTPException, Query, status

from studyatlas.dependencies import CurrentUserDep, LabReviewServiceDep, OptionalUserDep, SessionDep
from studyatlas.exceptions import StudyAtlasException
from studyatlas.repositories.catalog import LabRepository, UniversityRepository
from studyatlas.routers.errors import http_error
from studyatlas.schemas.api.catalog import LabDTO, LabFilters, LabListResponse, UniversityDTO
from studyatlas.schemas.api.reviews import LabReviewCreate, LabReviewDTO, LabReviewSummary

router = APIRouter(prefix="/labs", tags=["labs"])
logger = logging.getLogger(__name__)


@router.get("", response_model=LabListResponse)
def list_labs(
    db: SessionDep,
    search: Optional[str] = Query(None, description="Lab name or topics"),
    university_id: Optional[UUID] = None,
    faculty_area: Optional[str] = None,
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
):
    filters = LabFilters(search=search, university_id=university_id, faculty_area=faculty_area)
    labs, total = LabRepository(db).search(filters, limit=limit, offset=offset)
    return LabListResponse(
        items=[LabDTO.model_validate(lab) for lab in labs],
        total=total,
        limit=limit,
        offset=offset,
    )


@router.get("/{slug}", response_model=LabDTO)
def get_lab(slug: str, db: SessionDep):
    lab = LabRepository(db).get_by_slug(slug)
    if lab is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Lab {slug} not found")
    return lab


@router.get("/{slug}/universities", response_model=List[UniversityDTO])
def list_lab_universities(slug: str, db: SessionDep):
    lab = LabRepository(db).get_by_slug(slug)
    if lab is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Lab {slug} not found")
    return UniversityRepository(db).get_by_lab(lab.id)


# ---- Reviews ----


@router.get("/{slug}/reviews", response_model=List[LabReviewDTO])
def list_lab_reviews(slug: str, service: LabReviewServiceDep, viewer_id: OptionalUserDep):
    try:
        return service.list_reviews(service.get_lab_id(slug), viewer_id)
    except StudyAtlasException as e:
        raise http_error(e)


@router.get("/{slug}/reviews/summary", response_model=LabReviewSummary)
def get_lab_review_summary(slug: str, service: LabReviewServiceDep):
    try:
        return service.summary(service.get_lab_id(slug))
    except StudyAtlasException as e:
        raise http_error(e)


@router.post("/{slug}/reviews", response_model=LabReviewDTO, status_code=status.HTTP_201_CREATED)
def create_lab_review(slug: str, payload: LabReviewCreate, service: LabReviewServiceDep, user_id: CurrentUserDep):
    try:
        return service.create_review(user_id, service.get_lab_id(slug), payload)
    except StudyAtlasException as e:
        raise http_error(e)
