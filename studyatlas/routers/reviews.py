import logging
from uuid import UUID

from fastapi import APIRouter, status

from studyatlas.dependencies import CurrentUserDep, ReviewServiceDep
from studyatlas.exceptions import StudyAtlasException
from studyatlas.routers.errors import http_error
from studyatlas.schemas.api.reviews import ReviewDTO, ReviewUpdate, UpvoteToggleResponse

router = APIRouter(prefix="/reviews", tags=["reviews"])
logger = logging.getLogger(__name__)


@router.patch("/{review_id}", response_model=ReviewDTO)
def update_review(review_id: UUID, payload: ReviewUpdate, service: ReviewServiceDep, user_id: CurrentUserDep):
    try:
        return service.update_review(user_id, review_id, payload)
    except StudyAtlasException as e:
        raise http_error(e)


@router.delete("/{review_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_review(review_id: UUID, service: ReviewServiceDep, user_id: CurrentUserDep):
    try:
        service.delete_review(user_id, review_id)
    except StudyAtlasException as e:
        raise http_error(e)


@router.post("/{review_id}/upvote", response_model=UpvoteToggleResponse)
def toggle_review_upvote(review_id: UUID, service: ReviewServiceDep, user_id: CurrentUserDep):
    try:
        upvoted, upvote_count = service.toggle_upvote(user_id, review_id)
    except StudyAtlasException as e:
        raise http_error(e)
    return UpvoteToggleResponse(review_id=review_id, upvoted=upvoted, upvote_count=upvote_count)
