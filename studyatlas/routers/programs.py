from typing import Optional
from uuid import UUID

from fastapi import APIRouter, HTTPException, Query, status

from studyatlas.dependencies import SessionDep
from studyatlas.repositories.catalog import ProgramRepository
from studyatlas.schemas.api.catalog import ProgramDTO, ProgramListResponse

router = APIRouter(prefix="/programs", tags=["programs"])


@router.get("", response_model=ProgramListResponse)
def list_programs(
    db: SessionDep,
    search: Optional[str] = None,
    university_id: Optional[UUID] = None,
    level: Optional[str] = None,
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
):
    programs, total = ProgramRepository(db).search(
        search, university_id=university_id, level=level, limit=limit, offset=offset
    )
    return ProgramListResponse(
        items=[ProgramDTO.model_validate(p) for p in programs],
        total=total,
        limit=limit,
        offset=offset,
    )


@router.get("/{slug}", response_model=ProgramDTO)
def get_program(slug: str, db: SessionDep):
    program = ProgramRepository(db).get_by_slug(slug)
    if program is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Program {slug} not found")
    return program
