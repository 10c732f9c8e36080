import logging
from typing import List
from uuid import UUID

from fastapi import APIRouter, status

from studyatlas.dependencies import CurrentUserDep, DiaryServiceDep
from studyatlas.exceptions import StudyAtlasException
from studyatlas.routers.errors import http_error
from studyatlas.schemas.api.diary import (
    HistoryActionResponse,
    ItemCreate,
    ItemDTO,
    ItemUpdate,
    MoveRequest,
    NotebookCreate,
    NotebookDTO,
    NotebookUpdate,
    PageCreate,
    PageDTO,
    PageReorderRequest,
    PageUpdate,
    PlacementResponse,
    ResizeRequest,
)
from studyatlas.schemas.diary import SemesterAnalytics

router = APIRouter(prefix="/diary", tags=["diary"])
logger = logging.getLogger(__name__)


# ---- Notebooks ----


@router.get("/notebooks", response_model=List[NotebookDTO])
def list_notebooks(service: DiaryServiceDep, user_id: CurrentUserDep):
    return service.list_notebooks(user_id)


@router.post("/notebooks", response_model=NotebookDTO, status_code=status.HTTP_201_CREATED)
def create_notebook(payload: NotebookCreate, service: DiaryServiceDep, user_id: CurrentUserDep):
    return service.create_notebook(user_id, payload.name)


@router.patch("/notebooks/{notebook_id}", response_model=NotebookDTO)
def rename_notebook(notebook_id: UUID, payload: NotebookUpdate, service: DiaryServiceDep, user_id: CurrentUserDep):
    try:
        return service.rename_notebook(user_id, notebook_id, payload.name)
    except StudyAtlasException as e:
        raise http_error(e)


@router.delete("/notebooks/{notebook_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_notebook(notebook_id: UUID, service: DiaryServiceDep, user_id: CurrentUserDep):
    try:
        await service.delete_notebook(user_id, notebook_id)
    except StudyAtlasException as e:
        raise http_error(e)


# ---- Pages ----


@router.get("/notebooks/{notebook_id}/pages", response_model=List[PageDTO])
def list_pages(notebook_id: UUID, service: DiaryServiceDep, user_id: CurrentUserDep):
    try:
        return service.list_pages(user_id, notebook_id)
    except StudyAtlasException as e:
        raise http_error(e)


@router.post("/notebooks/{notebook_id}/pages", response_model=PageDTO, status_code=status.HTTP_201_CREATED)
def create_page(notebook_id: UUID, payload: PageCreate, service: DiaryServiceDep, user_id: CurrentUserDep):
    try:
        return service.create_page(user_id, notebook_id, payload)
    except StudyAtlasException as e:
        raise http_error(e)


@router.post("/notebooks/{notebook_id}/pages/reorder", response_model=List[PageDTO])
def reorder_pages(notebook_id: UUID, payload: PageReorderRequest, service: DiaryServiceDep, user_id: CurrentUserDep):
    order = {entry.id: entry.page_number for entry in payload.pages}
    try:
        return service.reorder_pages(user_id, notebook_id, order)
    except StudyAtlasException as e:
        raise http_error(e)


@router.patch("/pages/{page_id}", response_model=PageDTO)
def update_page(page_id: UUID, payload: PageUpdate, service: DiaryServiceDep, user_id: CurrentUserDep):
    try:
        return service.update_page(user_id, page_id, payload)
    except StudyAtlasException as e:
        raise http_error(e)


@router.delete("/pages/{page_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_page(page_id: UUID, service: DiaryServiceDep, user_id: CurrentUserDep):
    try:
        await service.delete_page(user_id, page_id)
    except StudyAtlasException as e:
        raise http_error(e)


# ---- Items ----


@router.get("/pages/{page_id}/items", response_model=List[ItemDTO])
def list_items(page_id: UUID, service: DiaryServiceDep, user_id: CurrentUserDep):
    try:
        return service.list_items(user_id, page_id)
    except StudyAtlasException as e:
        raise http_error(e)


@router.post("/pages/{page_id}/items", response_model=ItemDTO, status_code=status.HTTP_201_CREATED)
def create_item(page_id: UUID, payload: ItemCreate, service: DiaryServiceDep, user_id: CurrentUserDep):
    """Add an item to a page; dropping a course or lab checks that it exists."""
    try:
        return service.create_item(user_id, page_id, payload)
    except StudyAtlasException as e:
        raise http_error(e)


@router.patch("/items/{item_id}", response_model=ItemDTO)
def update_item(item_id: UUID, payload: ItemUpdate, service: DiaryServiceDep, user_id: CurrentUserDep):
    try:
        return service.update_item(user_id, item_id, payload)
    except StudyAtlasException as e:
        raise http_error(e)


@router.post("/items/{item_id}/move", response_model=PlacementResponse)
def move_item(item_id: UUID, payload: MoveRequest, service: DiaryServiceDep, user_id: CurrentUserDep):
    try:
        item, guides = service.move_item(user_id, item_id, payload.position_x, payload.position_y, snap=payload.snap)
    except StudyAtlasException as e:
        raise http_error(e)
    return PlacementResponse(item=ItemDTO.model_validate(item), guides=guides)


@router.post("/items/{item_id}/resize", response_model=PlacementResponse)
def resize_item(item_id: UUID, payload: ResizeRequest, service: DiaryServiceDep, user_id: CurrentUserDep):
    try:
        item, guides = service.resize_item(user_id, item_id, payload.width, payload.height, snap=payload.snap)
    except StudyAtlasException as e:
        raise http_error(e)
    return PlacementResponse(item=ItemDTO.model_validate(item), guides=guides)


@router.delete("/items/{item_id}", response_model=HistoryActionResponse)
async def remove_item(item_id: UUID, service: DiaryServiceDep, user_id: CurrentUserDep):
    """Remove an item; it can be brought back with the page's undo."""
    try:
        snapshot = await service.remove_item(user_id, item_id)
        can_undo, can_redo = await service.history_status(snapshot.page_id)
    except StudyAtlasException as e:
        raise http_error(e)
    return HistoryActionResponse(action="removed", item_id=item_id, can_undo=can_undo, can_redo=can_redo)


# ---- Removal history ----


@router.get("/pages/{page_id}/history")
async def get_history_status(page_id: UUID, service: DiaryServiceDep, user_id: CurrentUserDep):
    try:
        service.get_page(user_id, page_id)
    except StudyAtlasException as e:
        raise http_error(e)
    can_undo, can_redo = await service.history_status(page_id)
    return {"page_id": page_id, "can_undo": can_undo, "can_redo": can_redo}


@router.post("/pages/{page_id}/undo", response_model=HistoryActionResponse)
async def undo_removal(page_id: UUID, service: DiaryServiceDep, user_id: CurrentUserDep):
    try:
        item = await service.undo_removal(user_id, page_id)
    except StudyAtlasException as e:
        raise http_error(e)
    can_undo, can_redo = await service.history_status(page_id)
    return HistoryActionResponse(
        action="restored",
        item_id=item.id,
        item=ItemDTO.model_validate(item),
        can_undo=can_undo,
        can_redo=can_redo,
    )


@router.post("/pages/{page_id}/redo", response_model=HistoryActionResponse)
async def redo_removal(page_id: UUID, service: DiaryServiceDep, user_id: CurrentUserDep):
    try:
        item_id = await service.redo_removal(user_id, page_id)
    except StudyAtlasException as e:
        raise http_error(e)
    can_undo, can_redo = await service.history_status(page_id)
    return HistoryActionResponse(action="removed", item_id=item_id, can_undo=can_undo, can_redo=can_redo)


# ---- Analytics ----


@router.get("/pages/{page_id}/analytics", response_model=SemesterAnalytics)
def get_page_analytics(page_id: UUID, service: DiaryServiceDep, user_id: CurrentUserDep):
    try:
        return service.page_analytics(user_id, page_id)
    except StudyAtlasException as e:
        raise http_error(e)
