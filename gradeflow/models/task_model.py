# /gradeflow/models/task_model.py

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class TaskStatus(str, Enum):
    OPEN = "open"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


class TaskCreate(BaseModel):
    title: str = Field(..., min_length=1)
    description: str = ""
    assigned_to_id: str = Field(..., description="The ID of the student the task is assigned to.")
    due_date: Optional[datetime] = None
    category: Optional[str] = None


class TaskStatusUpdate(BaseModel):
    status: TaskStatus


class Task(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    description: str
    status: TaskStatus
    assigned_to_id: str
    assigned_by_id: str
    due_date: Optional[datetime] = None
    category: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
