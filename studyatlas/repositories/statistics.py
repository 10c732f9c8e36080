from collections import Counter
from typing import Dict, List, Tuple

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from studyatlas.models.catalog import Course, Lab, Program, Teacher, University


class StatisticsRepository:
    """Aggregated counts for the statistics dashboard."""

    def __init__(self, session: Session):
        self.session = session

    def _count(self, column) -> int:
        return self.session.scalar(select(func.count(column))) or 0

    def get_totals(self) -> Dict[str, int]:
        return {
            "universities": self._count(University.id),
            "courses": self._count(Course.id),
            "programs": self._count(Program.id),
            "labs": self._count(Lab.id),
            "teachers": self._count(Teacher.id),
        }

    def count_courses_by_level(self, level: str) -> int:
        stmt = select(func.count(Course.id)).where(Course.level == level)
        return self.session.scalar(stmt) or 0

    def count_courses_by(self, column) -> List[Tuple[str, int]]:
        """Course counts grouped on ``column``, nulls reported as 'Unknown', largest first."""
        label = func.coalesce(column, "Unknown")
        stmt = (
            select(label, func.count(Course.id))
            .group_by(label)
            .order_by(func.count(Course.id).desc(), label)
        )
        return [(name, count) for name, count in self.session.execute(stmt).all()]

    def count_teacher_topics(self) -> Counter:
        counter: Counter = Counter()
        for topics in self.session.scalars(select(Teacher.topics)):
            for topic in topics or []:
                counter[topic] += 1
        return counter
