import logging
from typing import List, Optional, Tuple
from uuid import UUID

from studyatlas.config import DiarySettings
from studyatlas.exceptions import HistoryEmptyError, InvalidReferenceError, NotFoundError
from studyatlas.models.diary import DiaryNotebook, DiaryPage, DiaryPageItem
from studyatlas.repositories.catalog import CourseRepository, LabRepository
from studyatlas.repositories.diary import DiaryRepository
from studyatlas.schemas.api.diary import ItemCreate, ItemUpdate, PageCreate, PageUpdate
from studyatlas.schemas.diary import ItemSnapshot, PageBounds, Rect, SemesterAnalytics, SnapGuides
from studyatlas.services.diary import canvas
from studyatlas.services.diary.analytics import compute_semester_analytics
from studyatlas.services.diary.history import RemovalHistory

logger = logging.getLogger(__name__)

GEOMETRY_FIELDS = ("position_x", "position_y", "width", "height")


def _rect(item: DiaryPageItem) -> Rect:
    return Rect(x=item.position_x, y=item.position_y, width=item.width, height=item.height)


class DiaryService:
    """Notebook/page/item operations scoped to the calling user."""

    def __init__(
        self,
        repo: DiaryRepository,
        courses: CourseRepository,
        labs: LabRepository,
        history: RemovalHistory,
        settings: DiarySettings,
    ):
        self.repo = repo
        self.courses = courses
        self.labs = labs
        self.history = history
        self.settings = settings
        self.page_bounds = PageBounds(width=settings.page_width, height=settings.page_height)

    # ---- Ownership ----

    def get_notebook(self, user_id: UUID, notebook_id: UUID) -> DiaryNotebook:
        notebook = self.repo.get_notebook(notebook_id)
        if notebook is None or notebook.user_id != user_id:
            raise NotFoundError(f"Notebook {notebook_id} not found")
        return notebook

    def get_page(self, user_id: UUID, page_id: UUID) -> DiaryPage:
        page = self.repo.get_page(page_id)
        if page is None:
            raise NotFoundError(f"Page {page_id} not found")
        self.get_notebook(user_id, page.notebook_id)
        return page

    def get_item(self, user_id: UUID, item_id: UUID) -> DiaryPageItem:
        item = self.repo.get_item(item_id)
        if item is None:
            raise NotFoundError(f"Item {item_id} not found")
        self.get_page(user_id, item.page_id)
        return item

    # ---- Notebooks ----

    def list_notebooks(self, user_id: UUID) -> List[DiaryNotebook]:
        return self.repo.list_notebooks(user_id)

    def create_notebook(self, user_id: UUID, name: str) -> DiaryNotebook:
        notebook = self.repo.create_notebook(user_id, name)
        logger.info(f"Created notebook {notebook.id} for user {user_id}")
        return notebook

    def rename_notebook(self, user_id: UUID, notebook_id: UUID, name: str) -> DiaryNotebook:
        return self.repo.rename_notebook(self.get_notebook(user_id, notebook_id), name)

    async def delete_notebook(self, user_id: UUID, notebook_id: UUID) -> None:
        notebook = self.get_notebook(user_id, notebook_id)
        page_ids = [page.id for page in self.repo.list_pages(notebook.id)]
        self.repo.delete_notebook(notebook)
        for page_id in page_ids:
            await self.history.clear(page_id)

    # ---- Pages ----

    def list_pages(self, user_id: UUID, notebook_id: UUID) -> List[DiaryPage]:
        self.get_notebook(user_id, notebook_id)
        return self.repo.list_pages(notebook_id)

    def create_page(self, user_id: UUID, notebook_id: UUID, payload: PageCreate) -> DiaryPage:
        self.get_notebook(user_id, notebook_id)
        page_number = payload.page_number
        if page_number is None:
            page_number = self.repo.next_page_number(notebook_id)
        return self.repo.create_page(
            notebook_id,
            page_number=page_number,
            page_type=payload.page_type,
            title=payload.title,
            semester=payload.semester,
        )

    def update_page(self, user_id: UUID, page_id: UUID, payload: PageUpdate) -> DiaryPage:
        page = self.get_page(user_id, page_id)
        return self.repo.update_page(page, **payload.model_dump(exclude_unset=True))

    async def delete_page(self, user_id: UUID, page_id: UUID) -> None:
        page = self.get_page(user_id, page_id)
        self.repo.delete_page(page)
        await self.history.clear(page_id)

    def reorder_pages(self, user_id: UUID, notebook_id: UUID, order: dict) -> List[DiaryPage]:
        self.get_notebook(user_id, notebook_id)
        return self.repo.reorder_pages(notebook_id, order)

    # ---- Items ----

    def list_items(self, user_id: UUID, page_id: UUID) -> List[DiaryPageItem]:
        self.get_page(user_id, page_id)
        return self.repo.list_items(page_id)

    def _check_reference(self, item_type: str, reference_id: Optional[UUID]) -> None:
        if item_type == "course" and self.courses.get_by_id(reference_id) is None:
            raise InvalidReferenceError(f"Course {reference_id} does not exist")
        if item_type == "lab" and self.labs.get_by_id(reference_id) is None:
            raise InvalidReferenceError(f"Lab {reference_id} does not exist")

    def create_item(self, user_id: UUID, page_id: UUID, payload: ItemCreate) -> DiaryPageItem:
        self.get_page(user_id, page_id)
        self._check_reference(payload.item_type, payload.reference_id)

        placed = canvas.constrain(
            Rect(x=payload.position_x, y=payload.position_y, width=payload.width, height=payload.height),
            self.page_bounds,
            self.settings.min_item_width,
            self.settings.min_item_height,
        )
        fields = payload.model_dump()
        fields.update(position_x=placed.x, position_y=placed.y, width=placed.width, height=placed.height)
        item = self.repo.create_item(page_id, **fields)
        logger.info(f"Created {item.item_type} item {item.id} on page {page_id} (zone={item.zone})")
        return item

    def update_item(self, user_id: UUID, item_id: UUID, payload: ItemUpdate) -> DiaryPageItem:
        item = self.get_item(user_id, item_id)
        fields = payload.model_dump(exclude_unset=True)
        geometry = {key: fields.pop(key) for key in GEOMETRY_FIELDS if fields.get(key) is not None}
        fields = {key: value for key, value in fields.items() if key not in GEOMETRY_FIELDS}
        if geometry:
            placed = canvas.constrain(
                Rect(
                    x=geometry.get("position_x", item.position_x),
                    y=geometry.get("position_y", item.position_y),
                    width=geometry.get("width", item.width),
                    height=geometry.get("height", item.height),
                ),
                self.page_bounds,
                self.settings.min_item_width,
                self.settings.min_item_height,
            )
            fields.update(position_x=placed.x, position_y=placed.y, width=placed.width, height=placed.height)
        return self.repo.update_item(item, **fields)

    def _siblings(self, item: DiaryPageItem) -> List[Rect]:
        return [_rect(other) for other in self.repo.list_items(item.page_id) if other.id != item.id]

    def move_item(
        self, user_id: UUID, item_id: UUID, x: float, y: float, snap: bool = True
    ) -> Tuple[DiaryPageItem, SnapGuides]:
        item = self.get_item(user_id, item_id)
        siblings = self._siblings(item)
        target = Rect(x=x, y=y, width=item.width, height=item.height)

        if snap:
            placed = canvas.snap_position(
                target,
                siblings,
                self.page_bounds,
                threshold=self.settings.snap_threshold,
                grid_size=self.settings.grid_size,
            )
        else:
            placed = canvas.constrain(
                target, self.page_bounds, self.settings.min_item_width, self.settings.min_item_height
            )

        guides = canvas.calculate_snap_guides(placed, siblings, self.settings.snap_threshold)
        item = self.repo.update_item(item, position_x=placed.x, position_y=placed.y)
        return item, guides

    def resize_item(
        self, user_id: UUID, item_id: UUID, width: float, height: float, snap: bool = True
    ) -> Tuple[DiaryPageItem, SnapGuides]:
        item = self.get_item(user_id, item_id)
        siblings = self._siblings(item)
        target = Rect(x=item.position_x, y=item.position_y, width=width, height=height)

        if snap:
            placed = canvas.snap_size(
                target,
                siblings,
                self.page_bounds,
                threshold=self.settings.snap_threshold,
                grid_size=self.settings.grid_size,
                min_width=self.settings.min_item_width,
                min_height=self.settings.min_item_height,
            )
        else:
            placed = canvas.constrain(
                target, self.page_bounds, self.settings.min_item_width, self.settings.min_item_height
            )

        guides = canvas.calculate_snap_guides(placed, siblings, self.settings.snap_threshold)
        item = self.repo.update_item(
            item, position_x=placed.x, position_y=placed.y, width=placed.width, height=placed.height
        )
        return item, guides

    async def remove_item(self, user_id: UUID, item_id: UUID) -> ItemSnapshot:
        item = self.get_item(user_id, item_id)
        snapshot = self.repo.delete_item(item)
        await self.history.record_removal(snapshot)
        return snapshot

    async def undo_removal(self, user_id: UUID, page_id: UUID) -> DiaryPageItem:
        self.get_page(user_id, page_id)
        snapshot = await self.history.pop_undo(page_id)
        if snapshot is None:
            raise HistoryEmptyError("Nothing to undo")

        try:
            item = self.repo.get_item(snapshot.id)
            if item is None:
                item = self.repo.restore_item(snapshot)
        except Exception:
            await self.history.push_undo(snapshot)
            raise
        await self.history.push_redo(snapshot)
        logger.info(f"Restored item {item.id} on page {page_id}")
        return item

    async def redo_removal(self, user_id: UUID, page_id: UUID) -> UUID:
        self.get_page(user_id, page_id)
        snapshot = await self.history.pop_redo(page_id)
        if snapshot is None:
            raise HistoryEmptyError("Nothing to redo")

        item = self.repo.get_item(snapshot.id)
        if item is not None:
            # The item may have moved since it was restored
            snapshot = self.repo.delete_item(item)
        await self.history.push_undo(snapshot)
        logger.info(f"Removed item {snapshot.id} again on page {page_id}")
        return snapshot.id

    async def history_status(self, page_id: UUID) -> Tuple[bool, bool]:
        return await self.history.status(page_id)

    # ---- Analytics ----

    def page_analytics(self, user_id: UUID, page_id: UUID) -> SemesterAnalytics:
        self.get_page(user_id, page_id)
        course_ids = [
            item.reference_id
            for item in self.repo.list_items_by_type(page_id, "course")
            if item.reference_id is not None
        ]
        by_id = {course.id: course for course in self.courses.get_many(course_ids)}
        # A course dropped twice counts twice, like on the page
        courses = [by_id[course_id] for course_id in course_ids if course_id in by_id]
        return compute_semester_analytics(courses)
