# /gradeflow/db/models/user_models.py

"""
This module defines the SQLAlchemy ORM model for the `User` entity, which
covers all three roles (admin, teacher, student). The student -> teacher
assignment is a self-referencing foreign key.
"""

from sqlalchemy import Column, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ..base_class import Base


class User(Base):
    """
    SQLAlchemy model representing a single account.

    Only students carry `assigned_teacher_id`. Deleting a teacher unassigns
    their students (see `UserRepositorySQL.delete_user`); the students
    themselves are kept.
    """
    id = Column(String, primary_key=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    role = Column(String, index=True, nullable=False)
    avatar = Column(String, nullable=True)

    # Written by the external auth collaborator; never serialized.
    hashed_password = Column(String, nullable=True)

    assigned_teacher_id = Column(String, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    assigned_teacher = relationship("User", remote_side=[id], foreign_keys=[assigned_teacher_id])
