import logging
import math
from typing import List, Optional, Tuple
from uuid import UUID

from pydantic import BaseModel

from studyatlas.exceptions import NotFoundError, PermissionDeniedError
from studyatlas.models.user import CourseReview, LabReview
from studyatlas.repositories.catalog import CourseRepository, LabRepository
from studyatlas.repositories.reviews import CourseReviewRepository, LabReviewRepository, ReviewRepository
from studyatlas.repositories.users import UserRepository
from studyatlas.schemas.api.reviews import LabReviewDTO, LabReviewSummary, RatingSummary, ReviewDTO

logger = logging.getLogger(__name__)

ASPECT_LABELS = ["Poor", "Fair", "Good", "Excellent"]
LAB_ASPECTS = ("research_quality", "mentorship", "work_environment")


def average_label(labels: List[str]) -> Optional[str]:
    """Mean of Poor..Excellent scored 1..4, rounded half up back to a label."""
    scores = [ASPECT_LABELS.index(label) + 1 for label in labels if label in ASPECT_LABELS]
    if not scores:
        return None
    index = math.floor(sum(scores) / len(scores) + 0.5) - 1
    return ASPECT_LABELS[max(0, min(len(ASPECT_LABELS) - 1, index))]


class ReviewService:
    """Shared review rules: one review per user and target, only the author edits."""

    target_name = "Entry"

    def __init__(self, reviews: ReviewRepository, targets, users: UserRepository):
        self.reviews = reviews
        self.targets = targets
        self.users = users

    def _require_target(self, target_id: UUID) -> None:
        if self.targets.get_by_id(target_id) is None:
            raise NotFoundError(f"{self.target_name} {target_id} not found")

    def _require_own_review(self, user_id: UUID, review_id: UUID):
        review = self.reviews.get_by_id(review_id)
        if review is None:
            raise NotFoundError(f"Review {review_id} not found")
        if review.user_id != user_id:
            raise PermissionDeniedError("Only the author can change this review")
        return review

    def _to_dto(self, review, username: Optional[str], has_upvoted: bool) -> BaseModel:
        raise NotImplementedError

    def list_reviews(self, target_id: UUID, viewer_id: Optional[UUID] = None) -> list:
        """``has_upvoted`` is relative to ``viewer_id`` and always false for anonymous viewers."""
        self._require_target(target_id)
        reviews = self.reviews.list_for_target(target_id)
        review_ids = [r.id for r in reviews]
        upvoted = self.reviews.upvoted_review_ids(viewer_id, review_ids) if viewer_id else set()
        usernames = self.users.get_usernames(list({r.user_id for r in reviews}))
        return [self._to_dto(r, usernames.get(r.user_id), r.id in upvoted) for r in reviews]

    def create_review(self, user_id: UUID, target_id: UUID, payload: BaseModel) -> BaseModel:
        self._require_target(target_id)
        review = self.reviews.create(target_id, user_id, **payload.model_dump())
        logger.info(f"User {user_id} reviewed {self.target_name.lower()} {target_id} ({review.rating}/5)")
        user = self.users.get_by_id(user_id)
        return self._to_dto(review, user.username if user else None, False)

    def update_review(self, user_id: UUID, review_id: UUID, payload: BaseModel) -> BaseModel:
        review = self._require_own_review(user_id, review_id)
        review = self.reviews.update(review, **payload.model_dump(exclude_unset=True, exclude_none=True))
        user = self.users.get_by_id(user_id)
        has_upvoted = review.id in self.reviews.upvoted_review_ids(user_id, [review.id])
        return self._to_dto(review, user.username if user else None, has_upvoted)

    def delete_review(self, user_id: UUID, review_id: UUID) -> None:
        self.reviews.delete(self._require_own_review(user_id, review_id))

    def toggle_upvote(self, user_id: UUID, review_id: UUID) -> Tuple[bool, int]:
        review = self.reviews.get_by_id(review_id)
        if review is None:
            raise NotFoundError(f"Review {review_id} not found")
        upvoted = self.reviews.toggle_upvote(review, user_id)
        return upvoted, review.upvote_count


class CourseReviewService(ReviewService):
    target_name = "Course"

    def __init__(self, reviews: CourseReviewRepository, courses: CourseRepository, users: UserRepository):
        super().__init__(reviews, courses, users)

    def _to_dto(self, review: CourseReview, username: Optional[str], has_upvoted: bool) -> ReviewDTO:
        return ReviewDTO(
            id=review.id,
            course_id=review.course_id,
            user_id=review.user_id,
            username=username,
            rating=review.rating,
            difficulty=review.difficulty,
            workload=review.workload,
            organization=review.organization,
            comment=review.comment,
            upvote_count=review.upvote_count or 0,
            has_upvoted=has_upvoted,
            created_at=review.created_at,
            updated_at=review.updated_at,
        )

    def rating_summary(self, course_id: UUID) -> RatingSummary:
        self._require_target(course_id)
        average, count = self.reviews.rating_summary(course_id)
        return RatingSummary(course_id=course_id, average=average, count=count)


class LabReviewService(ReviewService):
    target_name = "Lab"

    def __init__(self, reviews: LabReviewRepository, labs: LabRepository, users: UserRepository):
        super().__init__(reviews, labs, users)

    def get_lab_id(self, slug: str) -> UUID:
        lab = self.targets.get_by_slug(slug)
        if lab is None:
            raise NotFoundError(f"Lab {slug} not found")
        return lab.id

    def _to_dto(self, review: LabReview, username: Optional[str], has_upvoted: bool) -> LabReviewDTO:
        return LabReviewDTO(
            id=review.id,
            lab_id=review.lab_id,
            user_id=review.user_id,
            username=username,
            rating=review.rating,
            research_quality=review.research_quality,
            mentorship=review.mentorship,
            work_environment=review.work_environment,
            comment=review.comment,
            upvote_count=review.upvote_count or 0,
            has_upvoted=has_upvoted,
            created_at=review.created_at,
            updated_at=review.updated_at,
        )

    def summary(self, lab_id: UUID) -> LabReviewSummary:
        self._require_target(lab_id)
        average, count = self.reviews.rating_summary(lab_id)
        aspects = {aspect: average_label(self.reviews.aspect_ratings(lab_id, aspect)) for aspect in LAB_ASPECTS}
        return LabReviewSummary(lab_id=lab_id, average=average, count=count, **aspects)
