# /gradeflow/services/dashboard_service.py

# --- Core Imports ---
import pandas as pd

from ..core.exceptions import ForbiddenError
from ..core.logging_config import get_logger
from ..models.dashboard_model import AdminSummary, StudentProgress, StudentProgressResponse
from ..models.poll_model import PollStatus
from ..models.principal_model import Principal, Role
from ..models.task_model import TaskStatus
from ..models.ticket_model import TicketStatus
from . import visibility_policy
from .database_service import DatabaseService
from .poll_engine import is_expired, percentage

logger = get_logger(__name__)

_STATUS_COLUMNS = [s.value for s in TaskStatus]


def _status_counts_by_student(tasks_df: pd.DataFrame) -> pd.DataFrame:
    """
    One row per student id, one column per task status, zero-filled.
    An empty task frame yields an empty table with the status columns.
    """
    if tasks_df.empty:
        return pd.DataFrame(columns=_STATUS_COLUMNS, dtype="int64")
    counts = (
        tasks_df.groupby(["assigned_to_id", "status"])
        .size()
        .unstack(fill_value=0)
    )
    return counts.reindex(columns=_STATUS_COLUMNS, fill_value=0)


# --- Core Public Functions ---

def get_admin_summary(principal: Principal, db: DatabaseService) -> AdminSummary:
    """
    Calculates the admin overview statistics. This is the "thick" service
    layer: the router only delegates here.
    """
    if principal.role != Role.ADMIN:
        raise ForbiddenError("Only admins can view the system summary.")

    tasks_df = db.get_tasks_as_dataframe()
    status_counts = tasks_df["status"].value_counts() if not tasks_df.empty else pd.Series(dtype="int64")
    total_tasks = int(len(tasks_df))
    completed = int(status_counts.get(TaskStatus.COMPLETED.value, 0))

    open_tickets = [t for t in db.get_all_tickets() if t.status != TicketStatus.RESOLVED]
    active_polls = [
        p for p in db.get_all_polls()
        if p.status == PollStatus.ACTIVE and not is_expired(p)
    ]

    return AdminSummary(
        studentCount=len(db.get_users_by_role(Role.STUDENT.value)),
        teacherCount=len(db.get_users_by_role(Role.TEACHER.value)),
        taskCount=total_tasks,
        openTaskCount=int(status_counts.get(TaskStatus.OPEN.value, 0)),
        inProgressTaskCount=int(status_counts.get(TaskStatus.IN_PROGRESS.value, 0)),
        completedTaskCount=completed,
        completionRate=percentage(completed, total_tasks),
        openTicketCount=len(open_tickets),
        activePollCount=len(active_polls),
    )


def get_student_progress(principal: Principal, db: DatabaseService) -> StudentProgressResponse:
    """
    Task progress for every student the principal can see: all students for
    admins, their own students for teachers, and just themselves for
    students. Every task assigned to a student counts, whoever created it.
    """
    students = [
        u for u in visibility_policy.filter_users(principal, db.get_all_users())
        if u.role == Role.STUDENT
    ]
    counts = _status_counts_by_student(db.get_tasks_as_dataframe())

    progress = []
    for student in students:
        if student.id in counts.index:
            row = counts.loc[student.id]
            open_count = int(row[TaskStatus.OPEN.value])
            in_progress = int(row[TaskStatus.IN_PROGRESS.value])
            completed = int(row[TaskStatus.COMPLETED.value])
        else:
            open_count = in_progress = completed = 0
        total = open_count + in_progress + completed
        progress.append(StudentProgress(
            studentId=student.id,
            name=student.name,
            total=total,
            open=open_count,
            inProgress=in_progress,
            completed=completed,
            progress=percentage(completed, total),
        ))

    logger.debug(f"Computed progress for {len(progress)} students for {principal.id}.")
    return StudentProgressResponse(students=progress)
