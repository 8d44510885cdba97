# /gradeflow/services/visibility_policy.py

"""
Role- and relationship-scoped read/write rules for every entity kind.

Every function here is a pure decision over a `Principal` and entity
snapshots: no database access, no logging, no mutation. Entities may be ORM
rows or Pydantic models; only attribute access is used. The `filter_*`
functions return exactly the visible subset (order preserved), and the
`can_*` functions return a boolean that the calling service turns into a
`ForbiddenError` or `NotFoundError`.

Role dispatch is exhaustive over `Role`: a principal whose role is not one of
the three known roles is rejected instead of falling into a default branch.
"""

from typing import Iterable, List, Optional, TypeVar

from ..core.config import settings, PollVisibilityMode
from ..models.principal_model import Principal, Role, STAFF_ROLES
from ..models.poll_model import TargetAudience, STUDENT_AUDIENCES

T = TypeVar("T")


def _unknown_role(principal: Principal) -> ValueError:
    return ValueError(f"Unhandled role: {principal.role!r}")


# --- Tasks ---

def filter_tasks(principal: Principal, tasks: Iterable[T]) -> List[T]:
    """
    Admins see all tasks. Teachers see only the tasks they created (not every
    task assigned to their students). Students see tasks assigned to them.
    """
    if principal.role == Role.ADMIN:
        return list(tasks)
    if principal.role == Role.TEACHER:
        return [t for t in tasks if t.assigned_by_id == principal.id]
    if principal.role == Role.STUDENT:
        return [t for t in tasks if t.assigned_to_id == principal.id]
    raise _unknown_role(principal)


def can_view_task(principal: Principal, task) -> bool:
    return bool(filter_tasks(principal, [task]))


def can_create_task(principal: Principal) -> bool:
    return principal.role in STAFF_ROLES


def can_assign_task_to(principal: Principal, student) -> bool:
    """
    Admins may assign to any student; teachers only to their own students.
    `student` is the stored assignee record.
    """
    if student.role != Role.STUDENT:
        return False
    if principal.role == Role.ADMIN:
        return True
    if principal.role == Role.TEACHER:
        return student.assigned_teacher_id == principal.id
    if principal.role == Role.STUDENT:
        return False
    raise _unknown_role(principal)


def can_update_task_status(principal: Principal, task) -> bool:
    if principal.role in (Role.ADMIN, Role.TEACHER):
        return True
    if principal.role == Role.STUDENT:
        return task.assigned_to_id == principal.id
    raise _unknown_role(principal)


# --- Users ---

def filter_users(principal: Principal, users: Iterable[T]) -> List[T]:
    """
    Admins see everyone. Teachers see themselves plus the students assigned
    to them. Students see only themselves.
    """
    if principal.role == Role.ADMIN:
        return list(users)
    if principal.role == Role.TEACHER:
        return [u for u in users if u.id == principal.id or u.assigned_teacher_id == principal.id]
    if principal.role == Role.STUDENT:
        return [u for u in users if u.id == principal.id]
    raise _unknown_role(principal)


def can_manage_users(principal: Principal) -> bool:
    """Create, update and delete of user accounts."""
    return principal.role == Role.ADMIN


def can_view_own_teacher(principal: Principal) -> bool:
    """The "my teacher" and "my team" views exist only for students."""
    if principal.role in STAFF_ROLES:
        return False
    if principal.role == Role.STUDENT:
        return True
    raise _unknown_role(principal)


def filter_team_members(principal: Principal, users: Iterable[T]) -> List[T]:
    """
    A student's classmates: the other students assigned to the same teacher.
    Unassigned students and staff have no team. This is separate from
    `filter_users`, which never widens a student's view beyond themselves.
    """
    if not can_view_own_teacher(principal) or principal.assigned_teacher_id is None:
        return []
    return [
        u for u in users
        if u.role == Role.STUDENT
        and u.assigned_teacher_id == principal.assigned_teacher_id
        and u.id != principal.id
    ]


# --- Support Tickets ---

def filter_tickets(principal: Principal, tickets: Iterable[T]) -> List[T]:
    if principal.role == Role.ADMIN:
        return list(tickets)
    if principal.role in (Role.TEACHER, Role.STUDENT):
        return [t for t in tickets if t.submitted_by_id == principal.id]
    raise _unknown_role(principal)


def can_view_ticket(principal: Principal, ticket) -> bool:
    return bool(filter_tickets(principal, [ticket]))


def can_submit_ticket(principal: Principal) -> bool:
    # The backend accepts tickets from every authenticated role.
    return principal.role in (Role.ADMIN, Role.TEACHER, Role.STUDENT)


def can_update_ticket(principal: Principal) -> bool:
    return principal.role == Role.ADMIN


# --- Polls ---

def _student_sees_poll(principal: Principal, poll, mode: PollVisibilityMode) -> bool:
    if poll.target_audience not in STUDENT_AUDIENCES:
        return False
    if mode == PollVisibilityMode.AUDIENCE:
        return True
    if mode == PollVisibilityMode.ASSIGNED_TEACHER:
        if poll.created_by_role == Role.ADMIN:
            return True
        return principal.assigned_teacher_id is not None and poll.created_by_id == principal.assigned_teacher_id
    raise ValueError(f"Unhandled poll visibility mode: {mode!r}")


def filter_polls(
    principal: Principal,
    polls: Iterable[T],
    mode: Optional[PollVisibilityMode] = None,
) -> List[T]:
    """
    Admins see all polls. Teachers see polls they created plus admin polls
    addressed to students and staff. Students see polls addressed to them,
    further scoped by `mode` (defaults to the configured
    POLL_VISIBILITY_MODE):

    - ASSIGNED_TEACHER: only admin polls and polls from their own teacher.
    - AUDIENCE: every poll whose audience includes students.
    """
    mode = mode or settings.POLL_VISIBILITY_MODE
    if principal.role == Role.ADMIN:
        return list(polls)
    if principal.role == Role.TEACHER:
        return [
            p for p in polls
            if p.created_by_id == principal.id
            or (p.created_by_role == Role.ADMIN and p.target_audience == TargetAudience.STUDENTS_AND_STAFF)
        ]
    if principal.role == Role.STUDENT:
        return [p for p in polls if _student_sees_poll(principal, p, mode)]
    raise _unknown_role(principal)


def can_view_poll(principal: Principal, poll, mode: Optional[PollVisibilityMode] = None) -> bool:
    return bool(filter_polls(principal, [poll], mode))


def can_create_poll(principal: Principal) -> bool:
    return principal.role in STAFF_ROLES


def can_choose_poll_audience(principal: Principal) -> bool:
    # Teacher polls are always addressed to students only.
    return principal.role == Role.ADMIN


def can_close_poll(principal: Principal, poll) -> bool:
    return principal.role == Role.ADMIN or poll.created_by_id == principal.id
