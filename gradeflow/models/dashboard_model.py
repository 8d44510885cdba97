# /gradeflow/models/dashboard_model.py

# --- Core Imports ---
from typing import List

from pydantic import BaseModel, Field

# --- Model Definitions ---

class AdminSummary(BaseModel):
    """
    Defines the data contract for the admin dashboard summary endpoint.
    These are the numbers shown on the admin overview cards.
    """

    studentCount: int = Field(..., description="Total number of student accounts.", examples=[120])
    teacherCount: int = Field(..., description="Total number of teacher accounts.", examples=[8])
    taskCount: int = Field(..., description="Total number of tasks in the system.")
    openTaskCount: int
    inProgressTaskCount: int
    completedTaskCount: int
    completionRate: int = Field(
        ...,
        ge=0,
        le=100,
        description="Percentage of tasks completed, rounded half up. 0 when there are no tasks."
    )
    openTicketCount: int = Field(..., description="Support tickets that are not yet resolved.")
    activePollCount: int


class StudentProgress(BaseModel):
    """Task completion figures for a single student."""

    studentId: str
    name: str
    total: int
    open: int
    inProgress: int
    completed: int
    progress: int = Field(..., ge=0, le=100)


class StudentProgressResponse(BaseModel):
    students: List[StudentProgress]
