# assignment_eval/models/feedback.py
from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from assignment_eval.db.base import Base


class Feedback(Base):
    """Evaluation result, written once together with status 'evaluated'."""

    __tablename__ = "feedback"

    id = Column(Integer, primary_key=True, index=True)

    # 1:1，一个 submission 最多一条 feedback
    submission_id = Column(
        Integer, ForeignKey("submissions.id"), nullable=False, unique=True, index=True
    )

    plagiarism_risk = Column(String(4), nullable=False)  # "0%" .. "100%"
    feedback_summary = Column(Text, nullable=False)
    score = Column(Integer, nullable=False)

    evaluated_at = Column(DateTime(timezone=True), nullable=False)

    submission = relationship("Submission", back_populates="feedback")
