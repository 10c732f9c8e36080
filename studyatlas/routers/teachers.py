import logging
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, HTTPException, Query, status

from studyatlas.dependencies import SessionDep
from studyatlas.models.catalog import Teacher
from studyatlas.repositories.catalog import CourseRepository, TeacherRepository
from studyatlas.schemas.api.catalog import CourseDTO, TeacherDTO, TeacherListResponse

router = APIRouter(prefix="/teachers", tags=["teachers"])
logger = logging.getLogger(__name__)


def _get_teacher_or_404(db: SessionDep, teacher_id: UUID) -> Teacher:
    teacher = TeacherRepository(db).get_by_id(teacher_id)
    if teacher is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Teacher {teacher_id} not found")
    return teacher


@router.get("", response_model=TeacherListResponse)
def list_teachers(
    db: SessionDep,
    search: Optional[str] = Query(None, description="Full name, last name or email"),
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
):
    teachers, total = TeacherRepository(db).search(search, limit=limit, offset=offset)
    return TeacherListResponse(
        items=[TeacherDTO.model_validate(teacher) for teacher in teachers],
        total=total,
        limit=limit,
        offset=offset,
    )


@router.get("/{teacher_id}", response_model=TeacherDTO)
def get_teacher(teacher_id: UUID, db: SessionDep):
    return _get_teacher_or_404(db, teacher_id)


@router.get("/{teacher_id}/courses", response_model=List[CourseDTO])
def list_teacher_courses(teacher_id: UUID, db: SessionDep):
    """Courses whose listed professor matches the teacher's last name."""
    teacher = _get_teacher_or_404(db, teacher_id)
    last_name = teacher.name or (teacher.full_name.split() or [""])[-1]
    if not last_name:
        return []
    return CourseRepository(db).get_by_professor(last_name)
