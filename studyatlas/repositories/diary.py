from typing import Dict, List, Optional
from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from studyatlas.models.diary import DiaryNotebook, DiaryPage, DiaryPageItem
from studyatlas.schemas.diary import ItemSnapshot


class DiaryRepository:
    """Data access for notebooks, their pages and the items placed on them."""

    def __init__(self, session: Session):
        self.session = session

    # ---- Notebooks ----

    def list_notebooks(self, user_id: UUID) -> List[DiaryNotebook]:
        stmt = (
            select(DiaryNotebook)
            .where(DiaryNotebook.user_id == user_id)
            .order_by(DiaryNotebook.updated_at.desc())
        )
        return list(self.session.scalars(stmt))

    def get_notebook(self, notebook_id: UUID) -> Optional[DiaryNotebook]:
        return self.session.get(DiaryNotebook, notebook_id)

    def create_notebook(self, user_id: UUID, name: str) -> DiaryNotebook:
        notebook = DiaryNotebook(user_id=user_id, name=name)
        self.session.add(notebook)
        self.session.commit()
        self.session.refresh(notebook)
        return notebook

    def rename_notebook(self, notebook: DiaryNotebook, name: str) -> DiaryNotebook:
        notebook.name = name
        self.session.commit()
        self.session.refresh(notebook)
        return notebook

    def delete_notebook(self, notebook: DiaryNotebook) -> None:
        page_ids = select(DiaryPage.id).where(DiaryPage.notebook_id == notebook.id)
        self.session.execute(delete(DiaryPageItem).where(DiaryPageItem.page_id.in_(page_ids)))
        self.session.execute(delete(DiaryPage).where(DiaryPage.notebook_id == notebook.id))
        self.session.delete(notebook)
        self.session.commit()

    # ---- Pages ----

    def list_pages(self, notebook_id: UUID) -> List[DiaryPage]:
        stmt = (
            select(DiaryPage)
            .where(DiaryPage.notebook_id == notebook_id)
            .order_by(DiaryPage.page_number, DiaryPage.created_at)
        )
        return list(self.session.scalars(stmt))

    def get_page(self, page_id: UUID) -> Optional[DiaryPage]:
        return self.session.get(DiaryPage, page_id)

    def next_page_number(self, notebook_id: UUID) -> int:
        stmt = select(func.max(DiaryPage.page_number)).where(DiaryPage.notebook_id == notebook_id)
        current = self.session.scalar(stmt)
        return 0 if current is None else current + 1

    def create_page(self, notebook_id: UUID, **fields) -> DiaryPage:
        page = DiaryPage(notebook_id=notebook_id, **fields)
        self.session.add(page)
        self.session.commit()
        self.session.refresh(page)
        return page

    def update_page(self, page: DiaryPage, **fields) -> DiaryPage:
        for key, value in fields.items():
            setattr(page, key, value)
        self.session.commit()
        self.session.refresh(page)
        return page

    def delete_page(self, page: DiaryPage) -> None:
        self.session.execute(delete(DiaryPageItem).where(DiaryPageItem.page_id == page.id))
        self.session.delete(page)
        self.session.commit()

    def reorder_pages(self, notebook_id: UUID, order: Dict[UUID, int]) -> List[DiaryPage]:
        """Apply new page numbers in one transaction. Unknown ids are ignored."""
        for page in self.list_pages(notebook_id):
            if page.id in order:
                page.page_number = order[page.id]
        self.session.commit()
        return self.list_pages(notebook_id)

    # ---- Items ----

    def list_items(self, page_id: UUID) -> List[DiaryPageItem]:
        stmt = (
            select(DiaryPageItem)
            .where(DiaryPageItem.page_id == page_id)
            .order_by(DiaryPageItem.created_at)
        )
        return list(self.session.scalars(stmt))

    def list_items_by_type(self, page_id: UUID, item_type: str) -> List[DiaryPageItem]:
        stmt = (
            select(DiaryPageItem)
            .where(DiaryPageItem.page_id == page_id, DiaryPageItem.item_type == item_type)
            .order_by(DiaryPageItem.created_at)
        )
        return list(self.session.scalars(stmt))

    def get_item(self, item_id: UUID) -> Optional[DiaryPageItem]:
        return self.session.get(DiaryPageItem, item_id)

    def create_item(self, page_id: UUID, **fields) -> DiaryPageItem:
        item = DiaryPageItem(page_id=page_id, **fields)
        self.session.add(item)
        self.session.commit()
        self.session.refresh(item)
        return item

    def update_item(self, item: DiaryPageItem, **fields) -> DiaryPageItem:
        for key, value in fields.items():
            setattr(item, key, value)
        self.session.commit()
        self.session.refresh(item)
        return item

    def delete_item(self, item: DiaryPageItem) -> ItemSnapshot:
        snapshot = ItemSnapshot.model_validate(item)
        self.session.delete(item)
        self.session.commit()
        return snapshot

    def restore_item(self, snapshot: ItemSnapshot) -> DiaryPageItem:
        """Recreate a removed item with its original id and placement."""
        fields = snapshot.model_dump(exclude_none=True)
        item = DiaryPageItem(**fields)
        self.session.add(item)
        try:
            self.session.commit()
        except SQLAlchemyError:
            self.session.rollback()
            raise
        self.session.refresh(item)
        return item
