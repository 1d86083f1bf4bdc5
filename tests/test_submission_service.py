"""
Tests for submission creation, listing and stuck-pending recovery.
"""

from datetime import datetime, timedelta, timezone

import pytest

from assignment_eval.models.submission import SubmissionStatus
from assignment_eval.schemas.submission import SubmissionCreate
from assignment_eval.services import submission_service


@pytest.fixture
def enqueued(monkeypatch):
    calls = []
    monkeypatch.setattr(
        submission_service, "enqueue_evaluation_task", lambda submission_id: calls.append(submission_id)
    )
    return calls


class TestCreateSubmission:

    def test_creates_pending_and_enqueues_once(self, db_session, test_assignment, enqueued):
        obj_in = SubmissionCreate(
            assignment_id=test_assignment.id,
            student_name="  Ada Lovelace ",
            content="  The analytical engine weaves algebraic patterns.  ",
        )

        sub = submission_service.create_submission_and_enqueue_task(
            db_session, assignment=test_assignment, obj_in=obj_in
        )

        assert sub.id is not None
        assert sub.status == SubmissionStatus.PENDING.value
        assert sub.student_name == "Ada Lovelace"
        assert sub.content == "The analytical engine weaves algebraic patterns."
        assert enqueued == [sub.id]


class TestListing:

    def test_list_for_assignment(self, db_session, make_submission):
        first = make_submission("one")
        second = make_submission("two")

        subs = submission_service.list_submissions_for_assignment(
            db_session, assignment_id=first.assignment_id
        )

        assert {s.id for s in subs} == {first.id, second.id}

    def test_list_pending(self, db_session, make_submission):
        pending = make_submission("pending")
        make_submission("done", status=SubmissionStatus.EVALUATED.value)

        subs = submission_service.list_pending_submissions(db_session)

        assert [s.id for s in subs] == [pending.id]


class TestRequeuePending:

    def test_only_stale_pending_submissions_are_requeued(self, db_session, make_submission, enqueued):
        an_hour_ago = datetime.now(timezone.utc) - timedelta(hours=1)
        stale = make_submission("stale", created_at=an_hour_ago)
        make_submission("fresh", created_at=datetime.now(timezone.utc))
        make_submission(
            "stale but done",
            status=SubmissionStatus.EVALUATED.value,
            created_at=an_hour_ago,
        )
        make_submission(
            "stale but failed",
            status=SubmissionStatus.FAILED.value,
            created_at=an_hour_ago,
        )

        requeued = submission_service.requeue_pending_submissions(
            db_session, older_than_seconds=600
        )

        assert requeued == [stale.id]
        assert enqueued == [stale.id]

    def test_nothing_to_requeue(self, db_session, enqueued):
        assert submission_service.requeue_pending_submissions(
            db_session, older_than_seconds=600
        ) == []
        assert enqueued == []
