# assignment_eval/services/assignment_service.py
from typing import List, Optional

from sqlalchemy.orm import Session

from assignment_eval.models.assignment import Assignment
from assignment_eval.schemas.assignment import AssignmentCreate


def create_assignment(db: Session, *, obj_in: AssignmentCreate) -> Assignment:
    db_obj = Assignment(
        title=obj_in.title.strip(),
        description=obj_in.description.strip(),
    )
    db.add(db_obj)
    db.commit()
    db.refresh(db_obj)
    return db_obj


def get_assignment(db: Session, assignment_id: int) -> Optional[Assignment]:
    return db.get(Assignment, assignment_id)


def list_assignments(
    db: Session,
    *,
    skip: int = 0,
    limit: int = 100,
) -> List[Assignment]:
    """
    newest first
    """
    return (
        db.query(Assignment)
        .order_by(Assignment.created_at.desc(), Assignment.id.desc())
        .offset(skip)
        .limit(limit)
        .all()
    )
