# /gradeflow/db/models/task_models.py

from sqlalchemy import Column, String, DateTime
from sqlalchemy.sql import func

from ..base_class import Base


class Task(Base):
    """
    SQLAlchemy model representing a task assigned by a teacher or admin to a
    single student. Tasks are never deleted.
    """
    id = Column(String, primary_key=True, index=True)
    title = Column(String, nullable=False)
    description = Column(String, nullable=False, default="")
    status = Column(String, index=True, nullable=False, default="open")
    category = Column(String, nullable=True)
    due_date = Column(DateTime(timezone=True), nullable=True)

    # Plain strings, not foreign keys: user deletion never touches tasks.
    assigned_to_id = Column(String, nullable=False, index=True)
    assigned_by_id = Column(String, nullable=False, index=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
