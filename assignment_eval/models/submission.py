# assignment_eval/models/submission.py
import enum

from sqlalchemy import (
    Column,
    Integer,
    String,
    Text,
    DateTime,
    ForeignKey,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from assignment_eval.db.base import Base


class SubmissionStatus(str, enum.Enum):
    """pending -> evaluated | failed, never reversed."""

    PENDING = "pending"
    EVALUATED = "evaluated"
    FAILED = "failed"


class Submission(Base):
    __tablename__ = "submissions"

    id = Column(Integer, primary_key=True, index=True)

    assignment_id = Column(
        Integer, ForeignKey("assignments.id"), nullable=False, index=True
    )
    student_name = Column(String(100), nullable=False)

    content = Column(Text, nullable=False)
    file_path = Column(String(500), nullable=True)

    # 状态：pending / evaluated / failed
    status = Column(
        String(20),
        nullable=False,
        default=SubmissionStatus.PENDING.value,
        index=True,
    )

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    assignment = relationship("Assignment", back_populates="submissions")
    feedback = relationship("Feedback", back_populates="submission", uselist=False)
