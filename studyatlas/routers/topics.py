from typing import List

from fastapi import APIRouter

from studyatlas.dependencies import SessionDep
from studyatlas.repositories.catalog import TopicRepository
from studyatlas.schemas.api.catalog import TopicDTO

router = APIRouter(prefix="/topics", tags=["topics"])


@router.get("", response_model=List[TopicDTO])
def list_topics(db: SessionDep):
    return TopicRepository(db).list_all()
