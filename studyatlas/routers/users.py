import logging

from fastapi import APIRouter, HTTPException, status

from studyatlas.dependencies import CurrentUserDep, SessionDep
from studyatlas.repositories.users import UserRepository
from studyatlas.schemas.api.users import UserProfileDTO, UserProfileUpdate

router = APIRouter(prefix="/users", tags=["users"])
logger = logging.getLogger(__name__)


@router.get("/me", response_model=UserProfileDTO)
def get_my_profile(db: SessionDep, user_id: CurrentUserDep):
    user = UserRepository(db).get_by_id(user_id)
    if user is None:
        # Profiles are created lazily on first write
        return UserProfileDTO(id=user_id)
    return user


@router.put("/me", response_model=UserProfileDTO)
def update_my_profile(payload: UserProfileUpdate, db: SessionDep, user_id: CurrentUserDep):
    repo = UserRepository(db)
    fields = payload.model_dump(exclude_unset=True)
    if fields.get("email_public") is None:
        fields.pop("email_public", None)

    username = fields.get("username")
    if username:
        owner = repo.get_by_username(username)
        if owner is not None and owner.id != user_id:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=f"Username {username} is taken")

    user = repo.upsert(user_id, **fields)
    logger.info(f"Updated profile for user {user_id}")
    return user
