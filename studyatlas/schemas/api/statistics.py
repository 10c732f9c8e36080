from typing import List

from pydantic import BaseModel


class CountEntry(BaseModel):
    name: str
    count: int


class StatisticsResponse(BaseModel):
    """Pre-aggregated counts backing the statistics dashboard."""

    universities: int
    courses: int
    programs: int
    labs: int
    teachers: int
    bachelor_courses: int
    master_courses: int
    top_languages: List[CountEntry]
    terms: List[CountEntry]
    top_research_topics: List[CountEntry]
