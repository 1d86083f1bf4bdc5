# assignment_eval/schemas/submission.py
from datetime import datetime

from pydantic import BaseModel, Field

from assignment_eval.schemas.feedback import FeedbackPublic


class SubmissionCreate(BaseModel):
    assignment_id: int
    student_name: str = Field(min_length=1, max_length=100)
    content: str = Field(min_length=1)


class SubmissionAccepted(BaseModel):
    """提交后立即返回，评估在 worker 中异步进行"""
    submission_id: int
    status: str
    message: str = "Submission received and is being processed"


class SubmissionPublic(BaseModel):
    id: int
    assignment_id: int
    student_name: str
    content: str
    status: str  # pending / evaluated / failed
    created_at: datetime | None = None

    # 只有 status == 'evaluated' 时才有
    feedback: FeedbackPublic | None = None

    model_config = {"from_attributes": True}


class SubmissionSummary(BaseModel):
    """按作业列出提交时使用，不包含正文"""
    id: int
    student_name: str
    status: str
    created_at: datetime | None = None
    feedback: FeedbackPublic | None = None

    model_config = {"from_attributes": True}
