# assignment_eval/api/v1/endpoints/submissions.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from assignment_eval.db.session import get_db
from assignment_eval.schemas.submission import (
    SubmissionAccepted,
    SubmissionCreate,
    SubmissionPublic,
    SubmissionSummary,
)
from assignment_eval.services import assignment_service, submission_service

router = APIRouter(prefix="/submissions", tags=["submissions"])


@router.post("/", response_model=SubmissionAccepted, status_code=status.HTTP_201_CREATED)
def create_submission(
    obj_in: SubmissionCreate,
    db: Session = Depends(get_db),
):
    """
    学生提交文本；创建 submission 并入队评估任务，立即返回 pending。
    """
    if not obj_in.student_name.strip() or not obj_in.content.strip():
        raise HTTPException(status_code=400, detail="Student name and content cannot be empty")

    assignment = assignment_service.get_assignment(db, obj_in.assignment_id)
    if assignment is None:
        raise HTTPException(status_code=404, detail="Assignment not found")

    sub = submission_service.create_submission_and_enqueue_task(
        db, assignment=assignment, obj_in=obj_in
    )
    return SubmissionAccepted(submission_id=sub.id, status=sub.status)


# 必须定义在 /{submission_id} 之前
@router.get("/assignment/{assignment_id}", response_model=List[SubmissionSummary])
def list_submissions_for_assignment(
    assignment_id: int,
    db: Session = Depends(get_db),
    skip: int = 0,
    limit: int = 100,
):
    return submission_service.list_submissions_for_assignment(
        db, assignment_id=assignment_id, skip=skip, limit=limit
    )


@router.get("/{submission_id}", response_model=SubmissionPublic)
def get_submission(
    submission_id: int,
    db: Session = Depends(get_db),
):
    """
    查看单条提交；evaluated 时附带 feedback，failed 时不给出原因。
    """
    sub = submission_service.get_submission(db, submission_id)
    if not sub:
        raise HTTPException(status_code=404, detail="Submission not found")
    return sub
