# assignment_eval/services/submission_service.py
import logging
from datetime import datetime, timedelta, timezone
from typing import List, Optional

from sqlalchemy.orm import Session

from assignment_eval.models.assignment import Assignment
from assignment_eval.models.submission import Submission, SubmissionStatus
from assignment_eval.schemas.submission import SubmissionCreate
from assignment_eval.workers.queue import enqueue_evaluation_task

logger = logging.getLogger(__name__)


def create_submission_and_enqueue_task(
    db: Session,
    *,
    assignment: Assignment,
    obj_in: SubmissionCreate,
) -> Submission:
    """
    学生提交 + 创建评估任务
    status 初始为 'pending'，commit 之后才入队
    """
    submission = Submission(
        assignment_id=assignment.id,
        student_name=obj_in.student_name.strip(),
        content=obj_in.content.strip(),
        status=SubmissionStatus.PENDING.value,
    )

    db.add(submission)
    db.commit()
    db.refresh(submission)

    # 入队，让 worker 去跑评估
    enqueue_evaluation_task(submission.id)

    return submission


def get_submission(db: Session, submission_id: int) -> Optional[Submission]:
    return db.get(Submission, submission_id)


def list_submissions_for_assignment(
    db: Session,
    *,
    assignment_id: int,
    skip: int = 0,
    limit: int = 100,
) -> List[Submission]:
    return (
        db.query(Submission)
        .filter(Submission.assignment_id == assignment_id)
        .order_by(Submission.created_at.desc(), Submission.id.desc())
        .offset(skip)
        .limit(limit)
        .all()
    )


def list_pending_submissions(
    db: Session,
    *,
    created_before: datetime | None = None,
    skip: int = 0,
    limit: int = 100,
) -> List[Submission]:
    query = db.query(Submission).filter(
        Submission.status == SubmissionStatus.PENDING.value
    )
    if created_before is not None:
        query = query.filter(Submission.created_at < created_before)
    return (
        query.order_by(Submission.created_at.asc(), Submission.id.asc())
        .offset(skip)
        .limit(limit)
        .all()
    )


def requeue_pending_submissions(
    db: Session,
    *,
    older_than_seconds: int,
    limit: int = 1000,
) -> List[int]:
    """
    Re-enqueue submissions stuck in 'pending', e.g. after a worker crash.

    Only submissions older than the cutoff are picked so that jobs still
    waiting in the queue are not duplicated needlessly; a duplicate is
    harmless anyway because evaluation skips non-pending submissions.
    """
    cutoff = datetime.now(timezone.utc) - timedelta(seconds=older_than_seconds)
    stuck = list_pending_submissions(db, created_before=cutoff, limit=limit)

    requeued = []
    for submission in stuck:
        enqueue_evaluation_task(submission.id)
        requeued.append(submission.id)

    if requeued:
        logger.info(f"Re-enqueued {len(requeued)} pending submission(s): {requeued}")
    return requeued
