# assignment_eval/schemas/feedback.py
from datetime import datetime

from pydantic import BaseModel, Field


class FeedbackResult(BaseModel):
    """Output of the feedback scorer, whichever strategy produced it."""
    summary: str
    score: int = Field(ge=0, le=100)


class FeedbackPublic(BaseModel):
    submission_id: int
    plagiarism_risk: str
    feedback_summary: str
    score: int
    evaluated_at: datetime

    model_config = {"from_attributes": True}
