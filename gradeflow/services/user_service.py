# /gradeflow/services/user_service.py

"""
Business logic for user accounts.

Listing is open to every role but scoped by `visibility_policy.filter_users`.
Creating, editing and deleting accounts is reserved for admins. The one data
invariant enforced here is the student -> teacher assignment: only students
may be assigned, and only to an existing teacher.
"""

import uuid
from typing import Dict, List, Optional

from ..core.exceptions import ForbiddenError, NotFoundError, ValidationError
from ..core.logging_config import get_logger
from ..models.principal_model import Principal, Role
from ..models.user_model import TeacherProfile, UserCreate, UserUpdate
from . import visibility_policy
from .database_service import DatabaseService

logger = get_logger(__name__)


def _require_admin(principal: Principal, action: str) -> None:
    if not visibility_policy.can_manage_users(principal):
        logger.warning(f"User {principal.id} ({principal.role.value}) tried to {action}.")
        raise ForbiddenError(f"Only admins can {action}.")


def _validate_assignment(role: str, assigned_teacher_id: Optional[str], db: DatabaseService) -> None:
    if assigned_teacher_id is None:
        return
    if role != Role.STUDENT:
        raise ValidationError("Only students can be assigned to a teacher.", field="assigned_teacher_id")
    teacher = db.get_user_by_id(assigned_teacher_id)
    if teacher is None or teacher.role != Role.TEACHER:
        raise ValidationError(
            f"User {assigned_teacher_id} is not a teacher.", field="assigned_teacher_id"
        )


def list_users(principal: Principal, db: DatabaseService) -> List:
    return visibility_policy.filter_users(principal, db.get_all_users())


def get_current_user(principal: Principal, db: DatabaseService):
    user = db.get_user_by_id(principal.id)
    if user is None:
        raise NotFoundError("User", principal.id)
    return user


def get_my_teacher(principal: Principal, db: DatabaseService) -> Optional[TeacherProfile]:
    """
    The assigned teacher of a student, with how many students they mentor.
    Returns None while the student has no teacher.
    """
    if not visibility_policy.can_view_own_teacher(principal):
        raise ForbiddenError("Only students have an assigned teacher.")
    if principal.assigned_teacher_id is None:
        return None

    teacher = db.get_user_by_id(principal.assigned_teacher_id)
    if teacher is None or teacher.role != Role.TEACHER:
        logger.warning(f"Student {principal.id} points at missing teacher {principal.assigned_teacher_id}.")
        return None
    return TeacherProfile(
        id=teacher.id,
        name=teacher.name,
        email=teacher.email,
        avatar=teacher.avatar,
        student_count=len(db.get_students_by_teacher(teacher.id)),
    )


def list_team_members(principal: Principal, db: DatabaseService) -> List:
    """Fellow students assigned to the same teacher, excluding the caller."""
    if not visibility_policy.can_view_own_teacher(principal):
        raise ForbiddenError("Only students belong to a team.")
    if principal.assigned_teacher_id is None:
        return []
    classmates = db.get_students_by_teacher(principal.assigned_teacher_id)
    return visibility_policy.filter_team_members(principal, classmates)


def create_user(principal: Principal, user_data: UserCreate, db: DatabaseService):
    """Registers a new account. Password handling belongs to the auth service."""
    _require_admin(principal, "create users")

    if db.get_user_by_email(user_data.email):
        raise ValidationError(f"A user with email {user_data.email} already exists.", field="email")
    _validate_assignment(user_data.role.value, user_data.assigned_teacher_id, db)

    user_record = user_data.model_dump(mode="json")
    user_record["id"] = f"usr_{uuid.uuid4().hex[:12]}"
    new_user = db.add_user(user_record)
    logger.info(f"User {new_user.id} ({new_user.role}) created by {principal.id}.")
    return new_user


def update_user(principal: Principal, user_id: str, user_update: UserUpdate, db: DatabaseService):
    """
    Partial update of name, email, avatar and teacher assignment. Sending
    `assigned_teacher_id: null` explicitly removes a student's assignment.
    """
    _require_admin(principal, "update users")

    update_data: Dict = user_update.model_dump(exclude_unset=True)
    if not update_data:
        raise ValidationError("No update data provided.")

    user = db.get_user_by_id(user_id)
    if user is None:
        raise NotFoundError("User", user_id)

    for required in ("name", "email"):
        if required in update_data and update_data[required] is None:
            raise ValidationError(f"'{required}' cannot be empty.", field=required)

    new_email = update_data.get("email")
    if new_email and new_email != user.email:
        existing = db.get_user_by_email(new_email)
        if existing is not None and existing.id != user_id:
            raise ValidationError(f"A user with email {new_email} already exists.", field="email")

    if "assigned_teacher_id" in update_data:
        _validate_assignment(user.role, update_data["assigned_teacher_id"], db)

    updated_user = db.update_user(user_id, update_data)
    logger.info(f"User {user_id} updated by {principal.id}: {sorted(update_data)}.")
    return updated_user


def delete_user(principal: Principal, user_id: str, db: DatabaseService) -> None:
    """Deletes immediately. A deleted teacher's students become unassigned."""
    _require_admin(principal, "delete users")
    if not db.delete_user(user_id):
        raise NotFoundError("User", user_id)
    logger.info(f"User {user_id} deleted by {principal.id}.")
