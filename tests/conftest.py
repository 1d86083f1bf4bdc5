"""
Shared fixtures: in-memory database, seeded assignment, Gemini disabled.
"""

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from assignment_eval import models  # noqa
from assignment_eval.core.config import settings
from assignment_eval.db.base import Base
from assignment_eval.models.assignment import Assignment
from assignment_eval.models.submission import Submission, SubmissionStatus
from assignment_eval.services import feedback_client

# Test database (in-memory SQLite, one connection shared across threads)
TEST_DATABASE_URL = "sqlite:///:memory:"


@pytest.fixture(autouse=True)
def no_gemini(monkeypatch):
    """Tests never talk to Gemini unless they install a fake model."""
    monkeypatch.setattr(settings, "GEMINI_API_KEY", None)
    monkeypatch.setattr(feedback_client, "_model_instance", None)


@pytest.fixture(scope="function")
def engine():
    engine = create_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture(scope="function")
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db_session(session_factory):
    """Create a test database session."""
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def test_assignment(db_session):
    assignment = Assignment(
        title="Climate Essay",
        description="Write an essay about climate change and carbon emissions.",
    )
    db_session.add(assignment)
    db_session.commit()
    db_session.refresh(assignment)
    return assignment


@pytest.fixture
def make_submission(db_session, test_assignment):
    """Factory for submissions under the test assignment (or another one)."""

    def _make(
        content: str,
        *,
        status: str = SubmissionStatus.PENDING.value,
        assignment_id: int | None = None,
        student_name: str = "Test Student",
        **extra,
    ) -> Submission:
        submission = Submission(
            assignment_id=assignment_id or test_assignment.id,
            student_name=student_name,
            content=content,
            status=status,
            **extra,
        )
        db_session.add(submission)
        db_session.commit()
        db_session.refresh(submission)
        return submission

    return _make
