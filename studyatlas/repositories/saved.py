from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session

from studyatlas.models.catalog import Course, Lab, Program
from studyatlas.models.user import SavedCourse, SavedLab, SavedProgram

# kind -> (bookmark model, target column name, catalog model)
SAVED_KINDS = {
    "courses": (SavedCourse, "course_id", Course),
    "labs": (SavedLab, "lab_id", Lab),
    "programs": (SavedProgram, "program_id", Program),
}


class SavedItemsRepository:
    """Per-user bookmarks on courses, labs and programs."""

    def __init__(self, session: Session):
        self.session = session

    def _resolve(self, kind: str):
        try:
            return SAVED_KINDS[kind]
        except KeyError:
            raise ValueError(f"Unknown saved item kind: {kind}") from None

    def target_exists(self, kind: str, target_id: UUID) -> bool:
        _, _, catalog_model = self._resolve(kind)
        return self.session.get(catalog_model, target_id) is not None

    def list_for_user(self, kind: str, user_id: UUID) -> List[Tuple[UUID, UUID, object]]:
        model, column, _ = self._resolve(kind)
        stmt = select(model).where(model.user_id == user_id).order_by(model.created_at.desc())
        return [(row.id, getattr(row, column), row.created_at) for row in self.session.scalars(stmt)]

    def find(self, kind: str, user_id: UUID, target_id: UUID) -> Optional[object]:
        model, column, _ = self._resolve(kind)
        stmt = select(model).where(model.user_id == user_id, getattr(model, column) == target_id)
        return self.session.scalar(stmt)

    def toggle(self, kind: str, user_id: UUID, target_id: UUID) -> str:
        """Add the bookmark when absent, remove it when present."""
        model, column, _ = self._resolve(kind)
        existing = self.find(kind, user_id, target_id)
        if existing is not None:
            self.session.delete(existing)
            self.session.commit()
            return "removed"

        self.session.add(model(user_id=user_id, **{column: target_id}))
        self.session.commit()
        return "added"
