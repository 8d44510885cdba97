# /gradeflow/routers/dashboard_router.py

# --- Core FastAPI Imports ---
from fastapi import APIRouter, Depends

# --- Service and Model Imports ---
from ..core.deps import get_current_principal
from ..models.dashboard_model import AdminSummary, StudentProgressResponse
from ..models.principal_model import Principal
from ..services import dashboard_service
from ..services.database_service import DatabaseService, get_db_service

# --- APIRouter Instance ---
router = APIRouter()

# --- Endpoint Definitions ---
@router.get(
    "/summary",
    response_model=AdminSummary,
    summary="Get Admin Summary",
    description="Retrieves system-wide user, task, ticket and poll statistics. Admin only."
)
def get_dashboard_summary(
    principal: Principal = Depends(get_current_principal),
    db: DatabaseService = Depends(get_db_service)
):
    # Delegate immediately to the service layer.
    return dashboard_service.get_admin_summary(principal=principal, db=db)


@router.get(
    "/student-progress",
    response_model=StudentProgressResponse,
    summary="Get Student Progress",
    description="Task completion per student, scoped to the students the caller can see."
)
def get_student_progress(
    principal: Principal = Depends(get_current_principal),
    db: DatabaseService = Depends(get_db_service)
):
    return dashboard_service.get_student_progress(principal=principal, db=db)
