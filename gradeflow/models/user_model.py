# /gradeflow/models/user_model.py

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .principal_model import Role


class UserBase(BaseModel):
    name: str = Field(..., min_length=2, description="The user's full name.")
    email: str = Field(..., min_length=3, pattern=r"^[^@\s]+@[^@\s]+$")
    role: Role
    avatar: Optional[str] = None
    assigned_teacher_id: Optional[str] = Field(
        default=None,
        description="For students only: the ID of the teacher they are assigned to."
    )


class UserCreate(UserBase):
    """Payload an admin submits to register a new account."""
    pass


class UserUpdate(BaseModel):
    """
    Partial update. Only fields that are explicitly sent are applied, so an
    explicit `"assigned_teacher_id": null` unassigns a student while omitting
    the key leaves the assignment untouched.
    """
    name: Optional[str] = Field(default=None, min_length=2)
    email: Optional[str] = Field(default=None, min_length=3, pattern=r"^[^@\s]+@[^@\s]+$")
    avatar: Optional[str] = None
    assigned_teacher_id: Optional[str] = None


class User(UserBase):
    """
    The public representation of a user. There is no password field on this
    model, so password material can never leave the API.
    """
    model_config = ConfigDict(from_attributes=True)

    id: str
    created_at: Optional[datetime] = None


class TeacherProfile(BaseModel):
    """What a student sees of their assigned teacher."""
    id: str
    name: str
    email: str
    avatar: Optional[str] = None
    student_count: int = 0


class TeamMember(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    email: str
    avatar: Optional[str] = None
