import logging

from fastapi import APIRouter, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError

from studyatlas.dependencies import SessionDep
from studyatlas.models.catalog import Course
from studyatlas.repositories.statistics import StatisticsRepository
from studyatlas.schemas.api.statistics import CountEntry, StatisticsResponse

router = APIRouter(prefix="/statistics", tags=["statistics"])
logger = logging.getLogger(__name__)

TOP_LANGUAGES = 5
TOP_RESEARCH_TOPICS = 10


@router.get("", response_model=StatisticsResponse)
def get_statistics(db: SessionDep):
    """Catalogue totals plus the language, term and research topic breakdowns."""
    repo = StatisticsRepository(db)
    try:
        totals = repo.get_totals()
        languages = repo.count_courses_by(Course.language)[:TOP_LANGUAGES]
        terms = repo.count_courses_by(Course.term)
        topics = repo.count_teacher_topics().most_common(TOP_RESEARCH_TOPICS)
        bachelor = repo.count_courses_by_level("Ba")
        master = repo.count_courses_by_level("Ma")
    except SQLAlchemyError as e:
        logger.error(f"Failed to compute statistics: {e}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Unable to compute statistics")

    return StatisticsResponse(
        **totals,
        bachelor_courses=bachelor,
        master_courses=master,
        top_languages=[CountEntry(name=name, count=count) for name, count in languages],
        terms=[CountEntry(name=name, count=count) for name, count in terms],
        top_research_topics=[CountEntry(name=name, count=count) for name, count in topics],
    )
