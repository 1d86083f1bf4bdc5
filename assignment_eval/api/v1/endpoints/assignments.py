# assignment_eval/api/v1/endpoints/assignments.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from assignment_eval.db.session import get_db
from assignment_eval.schemas.assignment import AssignmentCreate, AssignmentPublic
from assignment_eval.services import assignment_service

router = APIRouter(prefix="/assignments", tags=["assignments"])


@router.post("/", response_model=AssignmentPublic, status_code=status.HTTP_201_CREATED)
def create_assignment(
    obj_in: AssignmentCreate,
    db: Session = Depends(get_db),
):
    if not obj_in.title.strip() or not obj_in.description.strip():
        raise HTTPException(
            status_code=400, detail="Title and description are required"
        )
    return assignment_service.create_assignment(db, obj_in=obj_in)


@router.get("/", response_model=List[AssignmentPublic])
def list_assignments(
    db: Session = Depends(get_db),
    skip: int = 0,
    limit: int = 100,
):
    return assignment_service.list_assignments(db, skip=skip, limit=limit)
