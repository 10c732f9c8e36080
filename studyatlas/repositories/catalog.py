from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy import Select, func, or_, select
from sqlalchemy.orm import Session

from studyatlas.models.catalog import (
    Course,
    Lab,
    Program,
    Teacher,
    Topic,
    University,
    course_programs,
    course_topics,
    course_universities,
    lab_universities,
)
from studyatlas.schemas.api.catalog import CourseFilters, LabFilters

# Upper bound of the ECTS slider; a max at or above it means "no limit".
ECTS_SLIDER_MAX = 30


def _paginate(session: Session, stmt: Select, limit: int, offset: int) -> Tuple[list, int]:
    total = session.scalar(select(func.count()).select_from(stmt.order_by(None).subquery())) or 0
    rows = list(session.scalars(stmt.limit(limit).offset(offset)))
    return rows, total


def _contains(value: str) -> str:
    return f"%{value.strip()}%"


class UniversityRepository:
    def __init__(self, session: Session):
        self.session = session

    def get_by_id(self, university_id: UUID) -> Optional[University]:
        return self.session.get(University, university_id)

    def get_by_slug(self, slug: str) -> Optional[University]:
        stmt = select(University).where(University.slug == slug)
        return self.session.scalar(stmt)

    def search(self, query: Optional[str] = None, limit: int = 50, offset: int = 0) -> Tuple[List[University], int]:
        stmt = select(University).order_by(University.name)
        if query and query.strip():
            stmt = stmt.where(University.name.ilike(_contains(query)))
        return _paginate(self.session, stmt, limit, offset)

    def get_by_lab(self, lab_id: UUID) -> List[University]:
        stmt = (
            select(University)
            .join(lab_universities, lab_universities.c.university_id == University.id)
            .where(lab_universities.c.lab_id == lab_id)
            .order_by(University.name)
        )
        return list(self.session.scalars(stmt))

    def get_count(self) -> int:
        return self.session.scalar(select(func.count(University.id))) or 0


class ProgramRepository:
    def __init__(self, session: Session):
        self.session = session

    def get_by_id(self, program_id: UUID) -> Optional[Program]:
        return self.session.get(Program, program_id)

    def get_by_slug(self, slug: str) -> Optional[Program]:
        return self.session.scalar(select(Program).where(Program.slug == slug))

    def search(
        self,
        query: Optional[str] = None,
        university_id: Optional[UUID] = None,
        level: Optional[str] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> Tuple[List[Program], int]:
        stmt = select(Program).order_by(Program.name)
        if query and query.strip():
            stmt = stmt.where(Program.name.ilike(_contains(query)))
        if university_id:
            stmt = stmt.where(Program.university_id == university_id)
        if level:
            stmt = stmt.where(Program.level == level)
        return _paginate(self.session, stmt, limit, offset)

    def get_count(self) -> int:
        return self.session.scalar(select(func.count(Program.id))) or 0


class CourseRepository:
    def __init__(self, session: Session):
        self.session = session

    def get_by_id(self, course_id: UUID) -> Optional[Course]:
        return self.session.get(Course, course_id)

    def get_many(self, course_ids: List[UUID]) -> List[Course]:
        if not course_ids:
            return []
        stmt = select(Course).where(Course.id.in_(course_ids))
        return list(self.session.scalars(stmt))

    def search(self, filters: CourseFilters, limit: int = 50, offset: int = 0) -> Tuple[List[Course], int]:
        stmt = select(Course).order_by(Course.name)

        # ---- Bridge filters (AND between them, any-of within topics) ----
        if filters.topics:
            stmt = stmt.where(
                Course.id.in_(
                    select(course_topics.c.course_id).where(course_topics.c.topic_name.in_(filters.topics))
                )
            )

        if filters.program_id:
            stmt = stmt.where(
                Course.id.in_(
                    select(course_programs.c.course_id).where(course_programs.c.program_id == filters.program_id)
                )
            )

        if filters.university_id:
            stmt = stmt.where(
                Course.id.in_(
                    select(course_universities.c.course_id).where(
                        course_universities.c.university_id == filters.university_id
                    )
                )
            )

        # ---- Free text ----
        if filters.search and filters.search.strip():
            pattern = _contains(filters.search)
            stmt = stmt.where(
                or_(
                    Course.name.ilike(pattern),
                    Course.code.ilike(pattern),
                    Course.description.ilike(pattern),
                    Course.topics.ilike(pattern),
                    Course.professor_name.ilike(pattern),
                )
            )

        # ---- Column filters ----
        if filters.language:
            stmt = stmt.where(Course.language == filters.language)
        if filters.level:
            stmt = stmt.where(Course.level == filters.level)
        if filters.term:
            stmt = stmt.where(Course.term == filters.term)
        if filters.ects_min is not None and filters.ects_min > 0:
            stmt = stmt.where(Course.ects >= filters.ects_min)
        if filters.ects_max is not None and filters.ects_max < ECTS_SLIDER_MAX:
            stmt = stmt.where(Course.ects <= filters.ects_max)
        if filters.exam_type:
            stmt = stmt.where(Course.exam_type == filters.exam_type)
        if filters.mandatory_optional:
            stmt = stmt.where(Course.mandatory_optional == filters.mandatory_optional)
        if filters.which_year:
            stmt = stmt.where(Course.which_year == filters.which_year)

        return _paginate(self.session, stmt, limit, offset)

    def get_by_university(self, university_id: UUID) -> List[Course]:
        stmt = (
            select(Course)
            .join(course_universities, course_universities.c.course_id == Course.id)
            .where(course_universities.c.university_id == university_id)
            .order_by(Course.name)
        )
        return list(self.session.scalars(stmt))

    def get_by_professor(self, name: str) -> List[Course]:
        stmt = select(Course).where(Course.professor_name.ilike(_contains(name))).order_by(Course.name)
        return list(self.session.scalars(stmt))

    def get_count(self) -> int:
        return self.session.scalar(select(func.count(Course.id))) or 0


class LabRepository:
    def __init__(self, session: Session):
        self.session = session

    def get_by_id(self, lab_id: UUID) -> Optional[Lab]:
        return self.session.get(Lab, lab_id)

    def get_by_slug(self, slug: str) -> Optional[Lab]:
        return self.session.scalar(select(Lab).where(Lab.slug == slug))

    def search(self, filters: LabFilters, limit: int = 50, offset: int = 0) -> Tuple[List[Lab], int]:
        stmt = select(Lab).order_by(Lab.name)

        if filters.search and filters.search.strip():
            pattern = _contains(filters.search)
            stmt = stmt.where(or_(Lab.name.ilike(pattern), Lab.topics.ilike(pattern)))

        if filters.university_id:
            stmt = stmt.where(
                Lab.id.in_(
                    select(lab_universities.c.lab_id).where(lab_universities.c.university_id == filters.university_id)
                )
            )

        if filters.faculty_area:
            stmt = stmt.where(Lab.faculty_area.ilike(_contains(filters.faculty_area)))

        return _paginate(self.session, stmt, limit, offset)

    def get_by_university(self, university_id: UUID) -> List[Lab]:
        stmt = (
            select(Lab)
            .join(lab_universities, lab_universities.c.lab_id == Lab.id)
            .where(lab_universities.c.university_id == university_id)
            .order_by(Lab.name)
        )
        return list(self.session.scalars(stmt))

    def get_count(self) -> int:
        return self.session.scalar(select(func.count(Lab.id))) or 0


class TeacherRepository:
    def __init__(self, session: Session):
        self.session = session

    def get_by_id(self, teacher_id: UUID) -> Optional[Teacher]:
        return self.session.get(Teacher, teacher_id)

    def search(self, query: Optional[str] = None, limit: int = 50, offset: int = 0) -> Tuple[List[Teacher], int]:
        stmt = select(Teacher).order_by(Teacher.full_name)
        if query and query.strip():
            pattern = _contains(query)
            stmt = stmt.where(
                or_(
                    Teacher.full_name.ilike(pattern),
                    Teacher.name.ilike(pattern),
                    Teacher.email.ilike(pattern),
                )
            )
        return _paginate(self.session, stmt, limit, offset)


class TopicRepository:
    def __init__(self, session: Session):
        self.session = session

    def list_all(self) -> List[Topic]:
        return list(self.session.scalars(select(Topic).order_by(Topic.name)))
