import uuid

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
    Uuid,
)

from studyatlas.db.interfaces.postgresql import Base
from studyatlas.models._common import utcnow


class User(Base):
    __tablename__ = "users"

    id = Column(Uuid, primary_key=True)
    username = Column(String, nullable=True, unique=True)
    email = Column(String, nullable=True)
    profile_photo_url = Column(String, nullable=True)
    email_public = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)


class SavedCourse(Base):
    __tablename__ = "saved_courses"
    __table_args__ = (UniqueConstraint("user_id", "course_id", name="uq_saved_courses_user_course"),)

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, nullable=False, index=True)
    course_id = Column(Uuid, ForeignKey("courses.id", ondelete="CASCADE"), nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)


class SavedLab(Base):
    __tablename__ = "saved_labs"
    __table_args__ = (UniqueConstraint("user_id", "lab_id", name="uq_saved_labs_user_lab"),)

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, nullable=False, index=True)
    lab_id = Column(Uuid, ForeignKey("labs.id", ondelete="CASCADE"), nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)


class SavedProgram(Base):
    __tablename__ = "saved_programs"
    __table_args__ = (UniqueConstraint("user_id", "program_id", name="uq_saved_programs_user_program"),)

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, nullable=False, index=True)
    program_id = Column(Uuid, ForeignKey("programs.id", ondelete="CASCADE"), nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)


class CourseReview(Base):
    __tablename__ = "course_reviews"
    __table_args__ = (
        UniqueConstraint("course_id", "user_id", name="uq_course_reviews_course_user"),
        CheckConstraint("rating BETWEEN 1 AND 5", name="ck_course_reviews_rating"),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    course_id = Column(Uuid, ForeignKey("courses.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(Uuid, nullable=False, index=True)
    rating = Column(Integer, nullable=False)
    difficulty = Column(String, nullable=True)
    workload = Column(String, nullable=True)
    organization = Column(String, nullable=True)
    comment = Column(Text, nullable=True)
    upvote_count = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)


class CourseReviewUpvote(Base):
    __tablename__ = "course_review_upvotes"
    __table_args__ = (UniqueConstraint("review_id", "user_id", name="uq_course_review_upvotes_review_user"),)

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    review_id = Column(Uuid, ForeignKey("course_reviews.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(Uuid, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)


class LabReview(Base):
    __tablename__ = "lab_reviews"
    __table_args__ = (
        UniqueConstraint("lab_id", "user_id", name="uq_lab_reviews_lab_user"),
        CheckConstraint("rating BETWEEN 1 AND 5", name="ck_lab_reviews_rating"),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    lab_id = Column(Uuid, ForeignKey("labs.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(Uuid, nullable=False, index=True)
    rating = Column(Integer, nullable=False)
    # Poor / Fair / Good / Excellent
    research_quality = Column(String, nullable=True)
    mentorship = Column(String, nullable=True)
    work_environment = Column(String, nullable=True)
    comment = Column(Text, nullable=True)
    upvote_count = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)


class LabReviewUpvote(Base):
    __tablename__ = "lab_review_upvotes"
    __table_args__ = (UniqueConstraint("review_id", "user_id", name="uq_lab_review_upvotes_review_user"),)

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    review_id = Column(Uuid, ForeignKey("lab_reviews.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(Uuid, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
