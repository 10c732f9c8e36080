import re
from typing import Iterable, List

from studyatlas.models.catalog import Course
from studyatlas.schemas.diary import SemesterAnalytics

_LIST_SEPARATOR = re.compile(r"[,;]")


def _split_list(value: str | None) -> List[str]:
    if not value:
        return []
    return [part.strip() for part in _LIST_SEPARATOR.split(value) if part.strip()]


def compute_semester_analytics(courses: Iterable[Course]) -> SemesterAnalytics:
    """Summarise the courses planned on a page: credits, exam mix, levels, terms."""
    analytics = SemesterAnalytics()
    topics: List[str] = []
    software: List[str] = []

    for course in courses:
        if course.ects:
            analytics.total_ects += course.ects

        exam_type = (course.exam_type or "").lower()
        if "written" in exam_type or "écrit" in exam_type:
            analytics.exam_types.written += 1
        elif "oral" in exam_type:
            analytics.exam_types.oral += 1
        elif "semester" in exam_type or "during" in exam_type:
            analytics.exam_types.during_semester += 1
        else:
            analytics.exam_types.other += 1

        level = (course.level or "").lower()
        if "ba" in level or "bachelor" in level:
            analytics.levels.bachelor += 1
        elif "ma" in level or "master" in level:
            analytics.levels.master += 1

        term = (course.term or "").lower()
        if "winter" in term or "fall" in term or "autumn" in term:
            analytics.terms.winter += 1
        elif "summer" in term or "spring" in term:
            analytics.terms.summer += 1

        for topic in _split_list(course.topics):
            if topic not in topics:
                topics.append(topic)
        for tool in _split_list(course.software_equipment):
            if tool not in software:
                software.append(tool)

    analytics.topics = topics
    analytics.software = software
    return analytics
