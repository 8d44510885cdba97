# /gradeflow/services/database_service.py

from typing import List, Dict, Optional, Generator

import pandas as pd
from sqlalchemy.orm import Session
from fastapi import Depends

# --- Core Database Setup ---
from gradeflow.db.database import get_db

# --- Repository Imports ---
from .database_helpers.user_repository_sql import UserRepositorySQL
from .database_helpers.task_repository_sql import TaskRepositorySQL
from .database_helpers.poll_repository_sql import PollRepositorySQL
from .database_helpers.ticket_repository_sql import TicketRepositorySQL


class DatabaseService:
    """
    The single persistence facade every service depends on. Business logic
    never touches a session or a query directly; it calls these delegating
    methods, which keeps the services testable against any store that offers
    the same find / find-by-id / insert / update surface.
    """

    def __init__(self, db_session: Session):
        self.session = db_session
        self.user_repo = UserRepositorySQL(db_session)
        self.task_repo = TaskRepositorySQL(db_session)
        self.poll_repo = PollRepositorySQL(db_session)
        self.ticket_repo = TicketRepositorySQL(db_session)

    # --- USER METHODS (DELEGATED) ---
    def get_all_users(self) -> List: return self.user_repo.get_all_users()
    def get_user_by_id(self, user_id: str): return self.user_repo.get_user_by_id(user_id)
    def get_user_by_email(self, email: str): return self.user_repo.get_user_by_email(email)
    def get_users_by_role(self, role: str) -> List: return self.user_repo.get_users_by_role(role)
    def get_students_by_teacher(self, teacher_id: str) -> List: return self.user_repo.get_students_by_teacher(teacher_id)
    def add_user(self, user_record: Dict): return self.user_repo.add_user(user_record)
    def update_user(self, user_id: str, user_update_data: Dict): return self.user_repo.update_user(user_id, user_update_data)
    def delete_user(self, user_id: str) -> bool: return self.user_repo.delete_user(user_id)

    # --- TASK METHODS (DELEGATED) ---
    def get_all_tasks(self) -> List: return self.task_repo.get_all_tasks()
    def get_task_by_id(self, task_id: str): return self.task_repo.get_task_by_id(task_id)
    def add_task(self, task_record: Dict): return self.task_repo.add_task(task_record)
    def update_task(self, task_id: str, task_update_data: Dict): return self.task_repo.update_task(task_id, task_update_data)

    # --- POLL METHODS (DELEGATED) ---
    def get_all_polls(self) -> List: return self.poll_repo.get_all_polls()
    def get_poll_by_id(self, poll_id: str): return self.poll_repo.get_poll_by_id(poll_id)
    def add_poll(self, poll_record: Dict, option_records: List[Dict]): return self.poll_repo.add_poll(poll_record, option_records)
    def update_poll(self, poll_id: str, poll_update_data: Dict): return self.poll_repo.update_poll(poll_id, poll_update_data)
    def has_user_voted(self, poll_id: str, user_id: str) -> bool: return self.poll_repo.has_user_voted(poll_id, user_id)
    def add_vote(self, vote_record: Dict): return self.poll_repo.add_vote(vote_record)

    # --- SUPPORT TICKET METHODS (DELEGATED) ---
    def get_all_tickets(self) -> List: return self.ticket_repo.get_all_tickets()
    def get_ticket_by_id(self, ticket_id: str): return self.ticket_repo.get_ticket_by_id(ticket_id)
    def add_ticket(self, ticket_record: Dict): return self.ticket_repo.add_ticket(ticket_record)
    def update_ticket(self, ticket_id: str, ticket_update_data: Dict): return self.ticket_repo.update_ticket(ticket_id, ticket_update_data)

    # --- ANALYTICS HELPERS ---
    def get_tasks_as_dataframe(self, tasks: Optional[List] = None) -> pd.DataFrame:
        """
        Returns tasks as a DataFrame with one row per task. Pass an already
        filtered list to restrict the frame; by default every task is used.
        """
        tasks = self.get_all_tasks() if tasks is None else tasks
        columns = ["id", "status", "assigned_to_id", "assigned_by_id"]
        return pd.DataFrame([{c: getattr(t, c) for c in columns} for t in tasks], columns=columns)


# --- DEPENDENCY PROVIDER ---
def get_db_service(db: Session = Depends(get_db)) -> Generator[DatabaseService, None, None]:
    """FastAPI dependency that provides a DatabaseService bound to the request's session."""
    yield DatabaseService(db_session=db)
