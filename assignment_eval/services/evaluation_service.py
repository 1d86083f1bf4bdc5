# assignment_eval/services/evaluation_service.py
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy.orm import Session

from assignment_eval.models.assignment import Assignment
from assignment_eval.models.feedback import Feedback
from assignment_eval.models.submission import Submission, SubmissionStatus
from assignment_eval.services.feedback_client import generate_feedback
from assignment_eval.services.similarity_service import (
    calculate_plagiarism_risk,
    format_risk,
)

logger = logging.getLogger(__name__)


class EvaluationError(Exception):
    pass


def _get_assignment(db: Session, submission: Submission) -> Assignment:
    assignment: Optional[Assignment] = db.get(Assignment, submission.assignment_id)
    if assignment is None:
        raise EvaluationError(
            f"assignment {submission.assignment_id} for submission {submission.id} not found"
        )
    return assignment


def get_corpus_contents(db: Session, submission: Submission) -> List[str]:
    """
    同一作业下其它已 evaluated 的提交内容。

    读取时不加锁：并发评估中的兄弟提交互相看不到，这是可接受的竞争。
    """
    rows = (
        db.query(Submission.content)
        .filter(
            Submission.assignment_id == submission.assignment_id,
            Submission.status == SubmissionStatus.EVALUATED.value,
            Submission.id != submission.id,
        )
        .all()
    )
    return [content for (content,) in rows]


def _mark_failed(db: Session, submission_id: int) -> None:
    try:
        submission: Optional[Submission] = db.get(Submission, submission_id)
        if submission is None:
            logger.error(f"Submission {submission_id} vanished before it could be marked failed")
            return
        if submission.status != SubmissionStatus.PENDING.value:
            # another run already reached a terminal state
            return
        submission.status = SubmissionStatus.FAILED.value
        db.add(submission)
        db.commit()
    except Exception:
        logger.exception(
            f"Could not mark submission {submission_id} as failed; it stays in its last committed state"
        )
        db.rollback()


def run_evaluation_for_submission(
    db: Session,
    submission_id: int,
) -> Optional[Submission]:
    """
    worker 调用：对单个 submission 做查重 + 评分。

    - 语料：同作业下其它 status='evaluated' 的提交
    - 写 Feedback，status: 'pending' -> 'evaluated'（同一次 commit）
    - 任何错误：回滚，status: 'pending' -> 'failed'，抛出 EvaluationError

    Returns None when the submission does not exist.
    """
    submission: Optional[Submission] = db.get(Submission, submission_id)
    if submission is None:
        logger.info(f"Submission {submission_id} not found, nothing to evaluate")
        return None

    if submission.status != SubmissionStatus.PENDING.value:
        logger.warning(
            f"Submission {submission_id} is already '{submission.status}', skipping evaluation"
        )
        return submission

    try:
        assignment = _get_assignment(db, submission)
        corpus = get_corpus_contents(db, submission)

        risk = calculate_plagiarism_risk(submission.content, corpus)
        result = generate_feedback(submission.content, assignment.description)

        feedback = Feedback(
            submission_id=submission.id,
            plagiarism_risk=format_risk(risk),
            feedback_summary=result.summary,
            score=result.score,
            evaluated_at=datetime.now(timezone.utc),
        )
        submission.status = SubmissionStatus.EVALUATED.value

        db.add(feedback)
        db.add(submission)
        db.commit()
    except Exception as e:
        logger.error(
            f"Evaluation failed for submission {submission_id}: {e}", exc_info=True
        )
        db.rollback()
        _mark_failed(db, submission_id)
        if isinstance(e, EvaluationError):
            raise
        raise EvaluationError(f"evaluation of submission {submission_id} failed: {e}") from e

    db.refresh(submission)
    logger.info(
        f"Submission {submission_id} evaluated: plagiarism_risk={feedback.plagiarism_risk}, "
        f"score={feedback.score}, corpus_size={len(corpus)}"
    )
    return submission
