# assignment_eval/schemas/assignment.py
from datetime import datetime

from pydantic import BaseModel, Field


class AssignmentCreate(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    description: str = Field(min_length=1)


class AssignmentPublic(BaseModel):
    id: int
    title: str
    description: str
    created_at: datetime | None = None

    model_config = {"from_attributes": True}
