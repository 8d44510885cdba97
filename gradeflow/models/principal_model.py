# /gradeflow/models/principal_model.py

"""
The acting user for a single request.

A `Principal` is built by the authentication collaborator (or the
`get_current_principal` dependency) and handed to every service call. It is
frozen: nothing downstream may change who is acting.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, model_validator


class Role(str, Enum):
    ADMIN = "admin"
    TEACHER = "teacher"
    STUDENT = "student"


STAFF_ROLES = (Role.ADMIN, Role.TEACHER)


class Principal(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    role: Role
    assigned_teacher_id: Optional[str] = None

    @model_validator(mode="after")
    def _only_students_are_assigned(self):
        if self.assigned_teacher_id is not None and self.role is not Role.STUDENT:
            raise ValueError("Only students can be assigned to a teacher.")
        return self

    @classmethod
    def from_user(cls, user) -> "Principal":
        """Builds a principal from a stored user record."""
        return cls(
            id=user.id,
            role=Role(user.role),
            assigned_teacher_id=user.assigned_teacher_id if user.role == Role.STUDENT.value else None,
        )
