import logging
from typing import List, Optional

from fastapi import APIRouter, HTTPException, Query, status

from studyatlas.dependencies import SessionDep
from studyatlas.repositories.catalog import CourseRepository, LabRepository, UniversityRepository
from studyatlas.schemas.api.catalog import CourseDTO, LabDTO, UniversityDTO, UniversityListResponse

router = APIRouter(prefix="/universities", tags=["universities"])
logger = logging.getLogger(__name__)


def _get_university_or_404(repo: UniversityRepository, slug: str):
    university = repo.get_by_slug(slug)
    if university is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"University {slug} not found")
    return university


@router.get("", response_model=UniversityListResponse)
def list_universities(
    db: SessionDep,
    search: Optional[str] = Query(None, description="Case-insensitive name match"),
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
):
    universities, total = UniversityRepository(db).search(search, limit=limit, offset=offset)
    return UniversityListResponse(
        items=[UniversityDTO.model_validate(u) for u in universities],
        total=total,
        limit=limit,
        offset=offset,
    )


@router.get("/{slug}", response_model=UniversityDTO)
def get_university(slug: str, db: SessionDep):
    return _get_university_or_404(UniversityRepository(db), slug)


@router.get("/{slug}/courses", response_model=List[CourseDTO])
def list_university_courses(slug: str, db: SessionDep):
    university = _get_university_or_404(UniversityRepository(db), slug)
    return CourseRepository(db).get_by_university(university.id)


@router.get("/{slug}/labs", response_model=List[LabDTO])
def list_university_labs(slug: str, db: SessionDep):
    university = _get_university_or_404(UniversityRepository(db), slug)
    return LabRepository(db).get_by_university(university.id)
