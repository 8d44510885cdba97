# /gradeflow/routers/tasks_router.py

from typing import List

from fastapi import APIRouter, Depends, status

from ..core.deps import get_current_principal
from ..models import task_model
from ..models.principal_model import Principal
from ..services import task_lifecycle
from ..services.database_service import DatabaseService, get_db_service

router = APIRouter()

# --- TASK COLLECTION ENDPOINTS (/api/tasks) ---

@router.get("", response_model=List[task_model.Task], summary="List Visible Tasks")
def get_tasks(
    principal: Principal = Depends(get_current_principal),
    db: DatabaseService = Depends(get_db_service)
):
    return task_lifecycle.list_tasks(principal=principal, db=db)


@router.post("", response_model=task_model.Task, status_code=status.HTTP_201_CREATED, summary="Assign a New Task")
def create_task(
    task_create: task_model.TaskCreate,
    principal: Principal = Depends(get_current_principal),
    db: DatabaseService = Depends(get_db_service)
):
    return task_lifecycle.create_task(principal=principal, task_data=task_create, db=db)

# --- INDIVIDUAL TASK ENDPOINTS (/api/tasks/{task_id}) ---

@router.get("/{task_id}", response_model=task_model.Task, summary="Get a Single Task")
def get_task(
    task_id: str,
    principal: Principal = Depends(get_current_principal),
    db: DatabaseService = Depends(get_db_service)
):
    return task_lifecycle.get_task(principal=principal, task_id=task_id, db=db)


@router.patch("/{task_id}", response_model=task_model.Task, summary="Update a Task's Status")
def update_task_status(
    task_id: str,
    status_update: task_model.TaskStatusUpdate,
    principal: Principal = Depends(get_current_principal),
    db: DatabaseService = Depends(get_db_service)
):
    return task_lifecycle.update_status(
        principal=principal, task_id=task_id, new_status=status_update.status, db=db
    )
