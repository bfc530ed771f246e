"""
Feedback Endpoints
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.services.feedback_service import FeedbackService
from app.schemas import Feedback, FeedbackCreate, EventFeedbackSummary, DataResponse
from app.api.deps import require_auth, require_min_role_level
from app.core.config import settings
from atams.encryption import encrypt_response_data

router = APIRouter()
feedback_service = FeedbackService()


@router.post(
    "",
    response_model=DataResponse[Feedback],
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_min_role_level(1))]
)
async def submit_feedback(
    payload: FeedbackCreate,
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_auth)
):
    """
    Submit feedback for an attended event

    **Errors:**
    - 400: Feedback already submitted
    - 403: User did not attend the event
    """
    feedback = feedback_service.submit(db, payload, current_user["user_id"])
    return DataResponse(
        success=True,
        message="Feedback submitted successfully",
        data=feedback
    )


@router.get(
    "/events/{event_id}",
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(require_min_role_level(50))]
)
async def get_event_feedback(
    event_id: str,
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_auth)
):
    """
    Get feedback of an event with the average rating

    **Authentication:**
    - Event organizer or Admin
    """
    summary = feedback_service.list_for_event(db, event_id, current_user)
    response = DataResponse[EventFeedbackSummary](
        success=True,
        message="Feedback retrieved successfully",
        data=summary
    )
    return encrypt_response_data(response, settings)
