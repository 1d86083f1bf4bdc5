"""
Evaluation Tasks for Worker
These tasks are executed by RQ workers to evaluate submissions asynchronously
"""

import logging

from assignment_eval.db.session import SessionLocal
from assignment_eval.models.submission import Submission, SubmissionStatus
from assignment_eval.services.evaluation_service import (
    run_evaluation_for_submission,
    EvaluationError,
)

logger = logging.getLogger(__name__)


def evaluation_task(submission_id: int) -> dict:
    """
    Worker task to evaluate one submission.

    This task:
    1. Creates a database session
    2. Runs plagiarism check and feedback scoring via evaluation_service
    3. Returns result summary

    Failures are logged and reported in the returned dict, never re-raised,
    so RQ does not retry; the submission is left 'failed'.

    Args:
        submission_id: ID of submission to evaluate

    Returns:
        Dictionary with evaluation results
    """
    db = SessionLocal()
    try:
        logger.info(f"Starting evaluation task for submission {submission_id}")

        existing = db.get(Submission, submission_id)
        if existing is None:
            return {
                "status": "skipped",
                "submission_id": submission_id,
                "message": f"Submission {submission_id} not found",
            }
        if existing.status != SubmissionStatus.PENDING.value:
            logger.warning(
                f"Submission {submission_id} is already '{existing.status}', nothing to do"
            )
            return {
                "status": "skipped",
                "submission_id": submission_id,
                "submission_status": existing.status,
                "message": f"Submission {submission_id} was not pending",
            }

        submission = run_evaluation_for_submission(db=db, submission_id=submission_id)

        if submission is None or submission.status != SubmissionStatus.EVALUATED.value:
            # vanished or finished by a concurrent run in the meantime
            return {
                "status": "skipped",
                "submission_id": submission_id,
                "submission_status": submission.status if submission else None,
                "message": f"Submission {submission_id} was not evaluated by this run",
            }

        feedback = submission.feedback
        return {
            "status": "success",
            "submission_id": submission.id,
            "submission_status": submission.status,
            "plagiarism_risk": feedback.plagiarism_risk,
            "score": feedback.score,
            "message": f"Evaluation finished for submission {submission_id}",
        }

    except EvaluationError as e:
        logger.error(f"Evaluation failed for submission {submission_id}: {e}")
        return {
            "status": "error",
            "submission_id": submission_id,
            "error": str(e),
            "message": f"Evaluation failed for submission {submission_id}",
        }

    except Exception as e:
        logger.error(
            f"Unexpected error during evaluation task for submission {submission_id}: {e}",
            exc_info=True,
        )
        return {
            "status": "error",
            "submission_id": submission_id,
            "error": str(e),
            "message": "Unexpected error during evaluation",
        }

    finally:
        db.close()
