# /gradeflow/services/database_helpers/user_repository_sql.py

"""
This module contains the raw SQLAlchemy queries for the `users` table. It
performs no authorization: callers decide who may read or write what, and
this repository just executes it.
"""

from typing import List, Dict, Optional
from sqlalchemy.orm import Session

from gradeflow.db.models.user_models import User


class UserRepositorySQL:
    def __init__(self, db_session: Session):
        self.db = db_session

    def get_all_users(self) -> List[User]:
        return self.db.query(User).order_by(User.name.asc()).all()

    def get_user_by_id(self, user_id: str) -> Optional[User]:
        """Fetches a single user by their unique ID."""
        return self.db.query(User).filter(User.id == user_id).first()

    def get_user_by_email(self, email: str) -> Optional[User]:
        """Fetches a single user by their unique email address."""
        return self.db.query(User).filter(User.email == email).first()

    def get_users_by_role(self, role: str) -> List[User]:
        return self.db.query(User).filter(User.role == role).order_by(User.name.asc()).all()

    def get_students_by_teacher(self, teacher_id: str) -> List[User]:
        return (
            self.db.query(User)
            .filter(User.role == "student", User.assigned_teacher_id == teacher_id)
            .order_by(User.name.asc())
            .all()
        )

    def add_user(self, record: Dict) -> User:
        """Creates a new User record in the database."""
        new_user = User(**record)
        self.db.add(new_user)
        self.db.commit()
        self.db.refresh(new_user)
        return new_user

    def update_user(self, user_id: str, data: Dict) -> Optional[User]:
        db_user = self.get_user_by_id(user_id)
        if db_user:
            for key, value in data.items():
                setattr(db_user, key, value)
            self.db.commit()
            self.db.refresh(db_user)
        return db_user

    def delete_user(self, user_id: str) -> bool:
        """
        Deletes a user immediately. Students assigned to the user are
        unassigned in the same transaction; tasks, tickets and votes that
        reference the user are left untouched.
        """
        db_user = self.get_user_by_id(user_id)
        if db_user:
            # SQLite does not enforce the ON DELETE SET NULL on its own.
            self.db.query(User).filter(User.assigned_teacher_id == user_id).update(
                {User.assigned_teacher_id: None}, synchronize_session="fetch"
            )
            self.db.delete(db_user)
            self.db.commit()
            return True
        return False
