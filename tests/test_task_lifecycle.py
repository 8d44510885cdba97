# /tests/test_task_lifecycle.py

import pytest
from datetime import datetime, timezone
from unittest.mock import patch

from gradeflow.core.config import TaskTransitionMode
from gradeflow.core.exceptions import ForbiddenError, InvalidStateError, NotFoundError, ValidationError
from gradeflow.models.task_model import TaskCreate, TaskStatus
from gradeflow.services import task_lifecycle


@pytest.fixture
def open_task(db_service, people, as_principal):
    """A task teacher_1 assigned to their student student_1."""
    return task_lifecycle.create_task(
        as_principal(people.teacher_1),
        TaskCreate(
            title="Read chapter 3",
            description="Take notes on the key dates.",
            assigned_to_id=people.student_1.id,
            due_date=datetime(2026, 11, 1, tzinfo=timezone.utc),
            category="History",
        ),
        db_service,
    )


# --- create ---

def test_created_task_is_open_and_stamped_with_creator(open_task, people):
    assert open_task.status == TaskStatus.OPEN.value
    assert open_task.assigned_by_id == people.teacher_1.id
    assert open_task.assigned_to_id == people.student_1.id
    assert open_task.id.startswith("tsk_")


def test_students_cannot_create_tasks(db_service, people, as_principal):
    with pytest.raises(ForbiddenError):
        task_lifecycle.create_task(
            as_principal(people.student_1),
            TaskCreate(title="Self-assigned", assigned_to_id=people.student_1.id),
            db_service,
        )


def test_teacher_cannot_assign_to_another_teachers_student(db_service, people, as_principal):
    with pytest.raises(ForbiddenError):
        task_lifecycle.create_task(
            as_principal(people.teacher_1),
            TaskCreate(title="Essay", assigned_to_id=people.student_3.id),
            db_service,
        )


def test_admin_can_assign_to_any_student(db_service, people, as_principal):
    created = task_lifecycle.create_task(
        as_principal(people.admin),
        TaskCreate(title="Orientation", assigned_to_id=people.student_4.id),
        db_service,
    )
    assert created.assigned_by_id == people.admin.id


def test_assignee_must_exist_and_be_a_student(db_service, people, as_principal):
    admin = as_principal(people.admin)
    with pytest.raises(NotFoundError):
        task_lifecycle.create_task(admin, TaskCreate(title="Ghost", assigned_to_id="usr_nobody"), db_service)
    with pytest.raises(ValidationError):
        task_lifecycle.create_task(admin, TaskCreate(title="Staff", assigned_to_id=people.teacher_2.id), db_service)


# --- update_status ---

def test_other_student_is_forbidden_and_assignee_can_start(db_service, people, as_principal, open_task):
    """Scenario: student_2 may not touch student_1's task; student_1 starts it."""
    with pytest.raises(ForbiddenError):
        task_lifecycle.update_status(as_principal(people.student_2), open_task.id, TaskStatus.IN_PROGRESS, db_service)

    updated = task_lifecycle.update_status(
        as_principal(people.student_1), open_task.id, TaskStatus.IN_PROGRESS, db_service
    )
    assert updated.status == TaskStatus.IN_PROGRESS.value


def test_full_forward_path(db_service, people, as_principal, open_task):
    student = as_principal(people.student_1)
    task_lifecycle.update_status(student, open_task.id, TaskStatus.IN_PROGRESS, db_service)
    done = task_lifecycle.update_status(student, open_task.id, TaskStatus.COMPLETED, db_service)
    assert done.status == TaskStatus.COMPLETED.value


@pytest.mark.parametrize("requested", [TaskStatus.COMPLETED, TaskStatus.OPEN])
def test_strict_mode_rejects_skips_and_repeats(db_service, people, as_principal, open_task, requested):
    with patch("gradeflow.services.task_lifecycle.settings.TASK_TRANSITION_MODE", TaskTransitionMode.STRICT):
        with pytest.raises(InvalidStateError):
            task_lifecycle.update_status(as_principal(people.admin), open_task.id, requested, db_service)
    assert db_service.get_task_by_id(open_task.id).status == TaskStatus.OPEN.value


def test_strict_mode_rejects_going_backwards(db_service, people, as_principal, open_task):
    teacher = as_principal(people.teacher_1)
    with patch("gradeflow.services.task_lifecycle.settings.TASK_TRANSITION_MODE", TaskTransitionMode.STRICT):
        task_lifecycle.update_status(teacher, open_task.id, TaskStatus.IN_PROGRESS, db_service)
        with pytest.raises(InvalidStateError):
            task_lifecycle.update_status(teacher, open_task.id, TaskStatus.OPEN, db_service)


def test_lenient_mode_allows_direct_jump(db_service, people, as_principal, open_task):
    with patch("gradeflow.services.task_lifecycle.settings.TASK_TRANSITION_MODE", TaskTransitionMode.LENIENT):
        updated = task_lifecycle.update_status(
            as_principal(people.student_1), open_task.id, TaskStatus.COMPLETED, db_service
        )
    assert updated.status == TaskStatus.COMPLETED.value


def test_teacher_may_update_any_task(db_service, people, as_principal, open_task):
    """Staff are not limited to their own tasks when changing status."""
    updated = task_lifecycle.update_status(
        as_principal(people.teacher_2), open_task.id, TaskStatus.IN_PROGRESS, db_service
    )
    assert updated.status == TaskStatus.IN_PROGRESS.value


def test_update_unknown_task_is_not_found(db_service, people, as_principal):
    with pytest.raises(NotFoundError):
        task_lifecycle.update_status(as_principal(people.admin), "tsk_missing", TaskStatus.IN_PROGRESS, db_service)


def test_is_transition_allowed_table():
    strict = TaskTransitionMode.STRICT
    assert task_lifecycle.is_transition_allowed(TaskStatus.OPEN, TaskStatus.IN_PROGRESS, strict)
    assert task_lifecycle.is_transition_allowed(TaskStatus.IN_PROGRESS, TaskStatus.COMPLETED, strict)
    assert not task_lifecycle.is_transition_allowed(TaskStatus.COMPLETED, TaskStatus.COMPLETED, strict)
    assert not task_lifecycle.is_transition_allowed(TaskStatus.COMPLETED, TaskStatus.IN_PROGRESS, strict)
    assert task_lifecycle.is_transition_allowed("completed", "open", TaskTransitionMode.LENIENT)


# --- list / get ---

def test_student_list_is_exactly_their_tasks(db_service, people, as_principal, open_task):
    admin = as_principal(people.admin)
    other = task_lifecycle.create_task(admin, TaskCreate(title="Other", assigned_to_id=people.student_2.id), db_service)
    extra = task_lifecycle.create_task(admin, TaskCreate(title="Extra", assigned_to_id=people.student_1.id), db_service)

    mine = {t.id for t in task_lifecycle.list_tasks(as_principal(people.student_1), db_service)}
    assert mine == {open_task.id, extra.id}
    assert other.id not in mine

    teacher_view = {t.id for t in task_lifecycle.list_tasks(as_principal(people.teacher_1), db_service)}
    assert teacher_view == {open_task.id}


def test_get_task_hides_invisible_tasks(db_service, people, as_principal, open_task):
    assert task_lifecycle.get_task(as_principal(people.student_1), open_task.id, db_service).id == open_task.id
    with pytest.raises(NotFoundError):
        task_lifecycle.get_task(as_principal(people.student_2), open_task.id, db_service)
