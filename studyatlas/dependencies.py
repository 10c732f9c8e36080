from typing import Annotated, AsyncGenerator, Generator, Optional
from uuid import UUID

from fastapi import Depends, Header, HTTPException, Request, status
from redis.asyncio import Redis
from sqlalchemy.orm import Session

from studyatlas.config import Settings, get_settings
from studyatlas.db.interfaces.base import BaseDatabase
from studyatlas.db.redis.redis import get_redis_client
from studyatlas.repositories.catalog import CourseRepository, LabRepository
from studyatlas.repositories.reviews import CourseReviewRepository, LabReviewRepository
from studyatlas.repositories.users import UserRepository
from studyatlas.repositories.workbench import ConversationRepository, EmailDraftRepository
from studyatlas.services.diary.factory import make_diary_service
from studyatlas.services.diary.service import DiaryService
from studyatlas.services.gateway.client import GatewayClient
from studyatlas.services.gateway.factory import make_gateway_client
from studyatlas.services.reviews import CourseReviewService, LabReviewService
from studyatlas.services.workbench import WorkbenchService


def get_app_settings(request: Request) -> Settings:
    return getattr(request.app.state, "settings", None) or get_settings()


def get_database(request: Request) -> BaseDatabase:
    return request.app.state.database


def get_db_session(database: Annotated[BaseDatabase, Depends(get_database)]) -> Generator[Session, None, None]:
    with database.get_session() as session:
        yield session


async def get_redis() -> AsyncGenerator[Redis, None]:
    client = get_redis_client()
    try:
        yield client
    finally:
        await client.aclose()


def get_gateway_client() -> GatewayClient:
    return make_gateway_client()


def _parse_user_id(x_user_id: Optional[str]) -> Optional[UUID]:
    if not x_user_id:
        return None
    try:
        return UUID(x_user_id)
    except ValueError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid X-User-Id header")


def get_current_user_id(x_user_id: Annotated[Optional[str], Header()] = None) -> UUID:
    """Identity of the caller, as asserted by the auth proxy in front of the API."""
    user_id = _parse_user_id(x_user_id)
    if user_id is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Authentication required")
    return user_id


def get_optional_user_id(x_user_id: Annotated[Optional[str], Header()] = None) -> Optional[UUID]:
    return _parse_user_id(x_user_id)


SettingsDep = Annotated[Settings, Depends(get_app_settings)]
DatabaseDep = Annotated[BaseDatabase, Depends(get_database)]
SessionDep = Annotated[Session, Depends(get_db_session)]
RedisDep = Annotated[Redis, Depends(get_redis)]
GatewayDep = Annotated[GatewayClient, Depends(get_gateway_client)]
CurrentUserDep = Annotated[UUID, Depends(get_current_user_id)]
OptionalUserDep = Annotated[Optional[UUID], Depends(get_optional_user_id)]


def get_diary_service(session: SessionDep, redis_client: RedisDep) -> DiaryService:
    return make_diary_service(session, redis_client)


def get_workbench_service(session: SessionDep, gateway: GatewayDep, database: DatabaseDep) -> WorkbenchService:
    return WorkbenchService(
        conversations=ConversationRepository(session),
        drafts=EmailDraftRepository(session),
        labs=LabRepository(session),
        gateway=gateway,
        database=database,
    )


def get_review_service(session: SessionDep) -> CourseReviewService:
    return CourseReviewService(
        reviews=CourseReviewRepository(session),
        courses=CourseRepository(session),
        users=UserRepository(session),
    )


def get_lab_review_service(session: SessionDep) -> LabReviewService:
    return LabReviewService(
        reviews=LabReviewRepository(session),
        labs=LabRepository(session),
        users=UserRepository(session),
    )


DiaryServiceDep = Annotated[DiaryService, Depends(get_diary_service)]
ReviewServiceDep = Annotated[CourseReviewService, Depends(get_review_service)]
LabReviewServiceDep = Annotated[LabReviewService, Depends(get_lab_review_service)]
WorkbenchServiceDep = Annotated[WorkbenchService, Depends(get_workbench_service)]
