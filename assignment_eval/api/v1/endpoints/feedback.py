# assignment_eval/api/v1/endpoints/feedback.py
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from assignment_eval.db.session import get_db
from assignment_eval.models.feedback import Feedback
from assignment_eval.schemas.feedback import FeedbackPublic

router = APIRouter(prefix="/feedback", tags=["feedback"])


@router.get("/{submission_id}", response_model=FeedbackPublic)
def get_feedback(
    submission_id: int,
    db: Session = Depends(get_db),
):
    feedback = (
        db.query(Feedback).filter(Feedback.submission_id == submission_id).first()
    )
    if feedback is None:
        raise HTTPException(status_code=404, detail="Feedback not found")
    return feedback
