# /gradeflow/services/database_helpers/task_repository_sql.py

from typing import List, Dict, Optional
from sqlalchemy.orm import Session

from gradeflow.db.models.task_models import Task


class TaskRepositorySQL:
    def __init__(self, db_session: Session):
        self.db = db_session

    def get_all_tasks(self) -> List[Task]:
        return self.db.query(Task).order_by(Task.created_at.desc(), Task.id.asc()).all()

    def get_task_by_id(self, task_id: str) -> Optional[Task]:
        return self.db.query(Task).filter(Task.id == task_id).first()

    def add_task(self, record: Dict) -> Task:
        new_task = Task(**record)
        self.db.add(new_task)
        self.db.commit()
        self.db.refresh(new_task)
        return new_task

    def update_task(self, task_id: str, data: Dict) -> Optional[Task]:
        db_task = self.get_task_by_id(task_id)
        if db_task:
            for key, value in data.items():
                setattr(db_task, key, value)
            self.db.commit()
            self.db.refresh(db_task)
        return db_task
