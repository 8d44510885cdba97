# /gradeflow/services/task_lifecycle.py

"""
This service owns task creation and the task status state machine:

    open --start--> in-progress --complete--> completed

How strictly status changes follow that path is controlled by
TASK_TRANSITION_MODE. In `strict` mode (the default) only the two forward
steps above are accepted; every other request, including skipping straight
to `completed`, going backwards, or re-sending the current status, raises
InvalidStateError. In `lenient` mode any status value is accepted, which
matches the behavior of the first version of the product.
"""

import uuid
from typing import Dict, List, Optional

from ..core.config import settings, TaskTransitionMode
from ..core.exceptions import ForbiddenError, InvalidStateError, NotFoundError, ValidationError
from ..core.logging_config import get_logger
from ..models.principal_model import Principal, Role
from ..models.task_model import TaskCreate, TaskStatus
from . import visibility_policy
from .database_service import DatabaseService

logger = get_logger(__name__)

# The only moves allowed in strict mode: current status -> next status.
STRICT_TRANSITIONS: Dict[TaskStatus, TaskStatus] = {
    TaskStatus.OPEN: TaskStatus.IN_PROGRESS,
    TaskStatus.IN_PROGRESS: TaskStatus.COMPLETED,
}


def is_transition_allowed(
    current: TaskStatus,
    requested: TaskStatus,
    mode: Optional[TaskTransitionMode] = None,
) -> bool:
    mode = mode or settings.TASK_TRANSITION_MODE
    if mode == TaskTransitionMode.LENIENT:
        return True
    if mode == TaskTransitionMode.STRICT:
        return STRICT_TRANSITIONS.get(TaskStatus(current)) == TaskStatus(requested)
    raise ValueError(f"Unhandled task transition mode: {mode!r}")


def create_task(principal: Principal, task_data: TaskCreate, db: DatabaseService):
    """
    Creates a task in `open` status. The creator is always recorded as the
    assigner, so nobody can create a task on another teacher's behalf.
    """
    if not visibility_policy.can_create_task(principal):
        logger.warning(f"User {principal.id} ({principal.role.value}) tried to create a task.")
        raise ForbiddenError("Only admins and teachers can create tasks.")

    title = task_data.title.strip()
    if not title:
        raise ValidationError("Please enter a title.", field="title")

    assignee = db.get_user_by_id(task_data.assigned_to_id)
    if assignee is None:
        raise NotFoundError("User", task_data.assigned_to_id)
    if assignee.role != Role.STUDENT:
        raise ValidationError("Tasks can only be assigned to students.", field="assigned_to_id")
    if not visibility_policy.can_assign_task_to(principal, assignee):
        raise ForbiddenError("Teachers can only assign tasks to their own students.")

    task_record = {
        "id": f"tsk_{uuid.uuid4().hex[:12]}",
        "title": title,
        "description": task_data.description.strip(),
        "status": TaskStatus.OPEN.value,
        "assigned_to_id": assignee.id,
        "assigned_by_id": principal.id,
        "due_date": task_data.due_date,
        "category": task_data.category,
    }
    new_task = db.add_task(task_record)
    logger.info(f"Task {new_task.id} assigned to {assignee.id} by {principal.id}.")
    return new_task


def list_tasks(principal: Principal, db: DatabaseService) -> List:
    return visibility_policy.filter_tasks(principal, db.get_all_tasks())


def get_task(principal: Principal, task_id: str, db: DatabaseService):
    task = db.get_task_by_id(task_id)
    if task is None or not visibility_policy.can_view_task(principal, task):
        raise NotFoundError("Task", task_id)
    return task


def update_status(principal: Principal, task_id: str, new_status: TaskStatus, db: DatabaseService):
    """
    Moves a task to `new_status` and returns the updated record.

    Students may only change tasks assigned to them; admins and teachers may
    change any task. The transition itself is checked against
    TASK_TRANSITION_MODE.
    """
    task = db.get_task_by_id(task_id)
    if task is None:
        raise NotFoundError("Task", task_id)

    if not visibility_policy.can_update_task_status(principal, task):
        logger.warning(f"User {principal.id} tried to update task {task_id} assigned to someone else.")
        raise ForbiddenError("Not authorized to update this task.")

    new_status = TaskStatus(new_status)
    previous_status = task.status
    if not is_transition_allowed(TaskStatus(previous_status), new_status):
        raise InvalidStateError(
            f"Cannot move a task from '{previous_status}' to '{new_status.value}'.",
            current=previous_status,
            requested=new_status.value,
        )

    updated_task = db.update_task(task_id, {"status": new_status.value})
    logger.info(f"Task {task_id} moved from '{previous_status}' to '{new_status.value}' by {principal.id}.")
    return updated_task
