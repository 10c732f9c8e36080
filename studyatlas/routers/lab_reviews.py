import logging
from uuid import UUID

from fastapi import APIRouter, status

from studyatlas.dependencies import CurrentUserDep, LabReviewServiceDep
from studyatlas.exceptions import StudyAtlasException
from studyatlas.routers.errors import http_error
from studyatlas.schemas.api.reviews import LabReviewDTO, LabReviewUpdate, UpvoteToggleResponse

router = APIRouter(prefix="/lab-reviews", tags=["reviews"])
logger = logging.getLogger(__name__)


@router.patch("/{review_id}", response_model=LabReviewDTO)
def update_lab_review(review_id: UUID, payload: LabReviewUpdate, service: LabReviewServiceDep, user_id: CurrentUserDep):
    try:
        return service.update_review(user_id, review_id, payload)
    except StudyAtlasException as e:
        raise http_error(e)


@router.delete("/{review_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_lab_review(review_id: UUID, service: LabReviewServiceDep, user_id: CurrentUserDep):
    try:
        service.delete_review(user_id, review_id)
    except StudyAtlasException as e:
        raise http_error(e)


@router.post("/{review_id}/upvote", response_model=UpvoteToggleResponse)
def toggle_lab_review_upvote(review_id: UUID, service: LabReviewServiceDep, user_id: CurrentUserDep):
    try:
        upvoted, upvote_count = service.toggle_upvote(user_id, review_id)
    except StudyAtlasException as e:
        raise http_error(e)
    return UpvoteToggleResponse(review_id=review_id, upvoted=upvoted, upvote_count=upvote_count)
