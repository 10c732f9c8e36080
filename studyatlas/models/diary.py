import uuid

from sqlalchemy import Boolean, Column, DateTime, Float, ForeignKey, Integer, String, Text, Uuid

from studyatlas.db.interfaces.postgresql import Base
from studyatlas.models._common import utcnow

ITEM_TYPES = ("course", "lab", "note", "todo", "text", "module")
PAGE_TYPES = ("semester_planner", "lab_tracker", "notes", "custom", "blank")


class DiaryNotebook(Base):
    __tablename__ = "diary_notebooks"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, nullable=False, index=True)
    name = Column(String, nullable=False, default="My Semester Planner")
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)


class DiaryPage(Base):
    __tablename__ = "diary_pages"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    notebook_id = Column(Uuid, ForeignKey("diary_notebooks.id", ondelete="CASCADE"), nullable=False, index=True)
    page_number = Column(Integer, nullable=False)
    page_type = Column(String, nullable=False, default="semester_planner")
    title = Column(String, nullable=True)
    semester = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)


class DiaryPageItem(Base):
    __tablename__ = "diary_page_items"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    page_id = Column(Uuid, ForeignKey("diary_pages.id", ondelete="CASCADE"), nullable=False, index=True)
    item_type = Column(String, nullable=False)
    reference_id = Column(Uuid, nullable=True)
    content = Column(Text, nullable=True)
    position_x = Column(Float, nullable=False, default=0)
    position_y = Column(Float, nullable=False, default=0)
    width = Column(Float, nullable=False, default=200)
    height = Column(Float, nullable=False, default=100)
    color = Column(String, nullable=False, default="yellow")
    zone = Column(String, nullable=True)
    is_completed = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)
