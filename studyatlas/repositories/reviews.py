from typing import List, Optional, Set, Tuple
from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from studyatlas.exceptions import ConflictError
from studyatlas.models.user import CourseReview, CourseReviewUpvote, LabReview, LabReviewUpvote


class ReviewRepository:
    """Reviews of one kind of catalogue entry, with per-user upvotes.

    Subclasses name the review table, its upvote table and the column holding
    the reviewed entry's id.
    """

    model = None
    upvote_model = None
    target_field = None
    duplicate_message = "You have already reviewed this"

    def __init__(self, session: Session):
        self.session = session

    @property
    def _target_column(self):
        return getattr(self.model, self.target_field)

    def _ordering(self) -> tuple:
        return self.model.upvote_count.desc(), self.model.created_at.desc()

    def get_by_id(self, review_id: UUID):
        return self.session.get(self.model, review_id)

    def list_for_target(self, target_id: UUID) -> list:
        stmt = select(self.model).where(self._target_column == target_id).order_by(*self._ordering())
        return list(self.session.scalars(stmt))

    def upvoted_review_ids(self, user_id: UUID, review_ids: List[UUID]) -> Set[UUID]:
        if not review_ids:
            return set()
        stmt = select(self.upvote_model.review_id).where(
            self.upvote_model.user_id == user_id,
            self.upvote_model.review_id.in_(review_ids),
        )
        return set(self.session.scalars(stmt))

    def rating_summary(self, target_id: UUID) -> Tuple[Optional[float], int]:
        stmt = select(func.avg(self.model.rating), func.count(self.model.id)).where(self._target_column == target_id)
        average, count = self.session.execute(stmt).one()
        return (float(average) if average is not None else None), count

    def create(self, target_id: UUID, user_id: UUID, **fields):
        review = self.model(user_id=user_id, upvote_count=0, **{self.target_field: target_id}, **fields)
        self.session.add(review)
        try:
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()
            raise ConflictError(self.duplicate_message) from e
        self.session.refresh(review)
        return review

    def update(self, review, **fields):
        for key, value in fields.items():
            setattr(review, key, value)
        self.session.commit()
        self.session.refresh(review)
        return review

    def delete(self, review) -> None:
        self.session.execute(delete(self.upvote_model).where(self.upvote_model.review_id == review.id))
        self.session.delete(review)
        self.session.commit()

    def toggle_upvote(self, review, user_id: UUID) -> bool:
        """Flip the caller's upvote and keep ``upvote_count`` in step. Returns the new state."""
        stmt = select(self.upvote_model).where(
            self.upvote_model.review_id == review.id,
            self.upvote_model.user_id == user_id,
        )
        existing = self.session.scalar(stmt)
        if existing is not None:
            self.session.delete(existing)
            review.upvote_count = max((review.upvote_count or 0) - 1, 0)
            upvoted = False
        else:
            self.session.add(self.upvote_model(review_id=review.id, user_id=user_id))
            review.upvote_count = (review.upvote_count or 0) + 1
            upvoted = True
        self.session.commit()
        self.session.refresh(review)
        return upvoted


class CourseReviewRepository(ReviewRepository):
    model = CourseReview
    upvote_model = CourseReviewUpvote
    target_field = "course_id"
    duplicate_message = "You have already reviewed this course"


class LabReviewRepository(ReviewRepository):
    model = LabReview
    upvote_model = LabReviewUpvote
    target_field = "lab_id"
    duplicate_message = "You have already reviewed this lab"

    def _ordering(self) -> tuple:
        # Lab pages show the newest reviews first
        return (self.model.created_at.desc(),)

    def aspect_ratings(self, lab_id: UUID, aspect: str) -> List[str]:
        column = getattr(self.model, aspect)
        stmt = select(column).where(self.model.lab_id == lab_id, column.is_not(None))
        return list(self.session.scalars(stmt))
