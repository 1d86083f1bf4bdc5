"""
Tests for the RQ worker task and queue wiring.
"""

from types import SimpleNamespace

import pytest

from assignment_eval.core.config import settings
from assignment_eval.models.submission import Submission, SubmissionStatus
from assignment_eval.workers import queue, tasks


@pytest.fixture
def task_sessions(monkeypatch, session_factory):
    """Point the task at the test database."""
    monkeypatch.setattr(tasks, "SessionLocal", session_factory)


class TestEvaluationTask:

    def test_success(self, task_sessions, db_session, make_submission):
        submission = make_submission("Photosynthesis turns light into chemical energy.")

        result = tasks.evaluation_task(submission.id)

        assert result["status"] == "success"
        assert result["submission_id"] == submission.id
        assert result["submission_status"] == SubmissionStatus.EVALUATED.value
        assert result["plagiarism_risk"] == "0%"
        assert 0 <= result["score"] <= 100

        db_session.expire_all()
        assert db_session.get(Submission, submission.id).status == SubmissionStatus.EVALUATED.value

    def test_missing_submission_is_skipped(self, task_sessions):
        result = tasks.evaluation_task(31337)
        assert result["status"] == "skipped"

    @pytest.mark.parametrize(
        "current_status", [SubmissionStatus.FAILED.value, SubmissionStatus.EVALUATED.value]
    )
    def test_non_pending_submission_is_skipped(
        self, task_sessions, db_session, make_submission, monkeypatch, current_status
    ):
        submission = make_submission("Already handled text.", status=current_status)
        calls = []
        monkeypatch.setattr(
            tasks, "run_evaluation_for_submission", lambda db, submission_id: calls.append(submission_id)
        )

        result = tasks.evaluation_task(submission.id)

        assert result["status"] == "skipped"
        assert result["submission_status"] == current_status
        assert calls == []
        db_session.expire_all()
        stored = db_session.get(Submission, submission.id)
        assert stored.status == current_status
        assert stored.feedback is None

    def test_run_that_does_not_evaluate_is_skipped(self, task_sessions, make_submission, monkeypatch):
        submission = make_submission("Raced text.")
        monkeypatch.setattr(
            tasks,
            "run_evaluation_for_submission",
            lambda db, submission_id: SimpleNamespace(
                id=submission_id, status=SubmissionStatus.FAILED.value, feedback=None
            ),
        )

        result = tasks.evaluation_task(submission.id)

        assert result["status"] == "skipped"
        assert result["submission_status"] == SubmissionStatus.FAILED.value

    def test_evaluation_error_is_reported_not_raised(self, task_sessions, db_session, make_submission):
        submission = make_submission("Orphaned text.", assignment_id=999)

        result = tasks.evaluation_task(submission.id)

        assert result["status"] == "error"
        assert "not found" in result["error"]
        db_session.expire_all()
        assert db_session.get(Submission, submission.id).status == SubmissionStatus.FAILED.value

    def test_unexpected_error_is_reported_not_raised(self, task_sessions, monkeypatch, make_submission):
        submission = make_submission("Any text.")

        def _explode(db, submission_id):
            raise MemoryError("out of memory")

        monkeypatch.setattr(tasks, "run_evaluation_for_submission", _explode)

        result = tasks.evaluation_task(submission.id)

        assert result["status"] == "error"
        assert result["message"] == "Unexpected error during evaluation"

    def test_session_is_closed(self, monkeypatch):
        closed = []

        class FakeSession:
            def get(self, model, ident):
                return None

            def close(self):
                closed.append(True)

        monkeypatch.setattr(tasks, "SessionLocal", FakeSession)
        monkeypatch.setattr(tasks, "run_evaluation_for_submission", lambda db, submission_id: None)

        tasks.evaluation_task(1)

        assert closed == [True]


def test_enqueue_uses_evaluation_queue(monkeypatch):
    enqueued = []

    class FakeQueue:
        def enqueue(self, func, *args, **kwargs):
            enqueued.append((func, args, kwargs))
            return SimpleNamespace(id="job-1")

    monkeypatch.setattr(queue, "get_queue", lambda name=None: FakeQueue())

    job_id = queue.enqueue_evaluation_task(42)

    assert job_id == "job-1"
    func, args, kwargs = enqueued[0]
    assert func is tasks.evaluation_task
    assert args == (42,)
    assert kwargs == {"job_timeout": settings.EVALUATION_JOB_TIMEOUT}
