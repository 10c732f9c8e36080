from redis.asyncio import Redis
from sqlalchemy.orm import Session

from studyatlas.config import get_settings
from studyatlas.repositories.catalog import CourseRepository, LabRepository
from studyatlas.repositories.diary import DiaryRepository
from studyatlas.services.diary.history import RemovalHistory
from studyatlas.services.diary.service import DiaryService


def make_diary_service(session: Session, redis_client: Redis) -> DiaryService:
    settings = get_settings()
    history = RemovalHistory(
        redis_client=redis_client,
        depth=settings.diary.history_depth,
        ttl_seconds=settings.redis_diary_history_ttl_seconds,
    )
    return DiaryService(
        repo=DiaryRepository(session),
        courses=CourseRepository(session),
        labs=LabRepository(session),
        history=history,
        settings=settings.diary,
    )
