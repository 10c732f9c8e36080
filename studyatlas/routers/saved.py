import logging
from typing import List
from uuid import UUID

from fastapi import APIRouter, HTTPException, status

from studyatlas.dependencies import CurrentUserDep, SessionDep
from studyatlas.repositories.saved import SavedItemsRepository
from studyatlas.schemas.api.saved import SavedItemDTO, SavedKind, ToggleSaveResponse

router = APIRouter(prefix="/saved", tags=["saved"])
logger = logging.getLogger(__name__)


@router.get("/{kind}", response_model=List[SavedItemDTO])
def list_saved(kind: SavedKind, db: SessionDep, user_id: CurrentUserDep):
    """Bookmarks of one kind, newest first."""
    rows = SavedItemsRepository(db).list_for_user(kind, user_id)
    return [SavedItemDTO(id=row_id, target_id=target_id, created_at=created_at) for row_id, target_id, created_at in rows]


@router.post("/{kind}/{target_id}/toggle", response_model=ToggleSaveResponse)
def toggle_saved(kind: SavedKind, target_id: UUID, db: SessionDep, user_id: CurrentUserDep):
    repo = SavedItemsRepository(db)
    if not repo.target_exists(kind, target_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"{kind[:-1].capitalize()} {target_id} not found")

    action = repo.toggle(kind, user_id, target_id)
    logger.info(f"User {user_id} {action} saved {kind[:-1]} {target_id}")
    return ToggleSaveResponse(action=action, target_id=target_id)
