# /gradeflow/routers/auth_router.py

from fastapi import APIRouter, Depends

from ..core.deps import get_current_principal
from ..models.principal_model import Principal
from ..models.user_model import User
from ..services import user_service
from ..services.database_service import DatabaseService, get_db_service

router = APIRouter()


@router.get("/me", response_model=User, summary="Get the Current User")
def read_current_user(
    principal: Principal = Depends(get_current_principal),
    db: DatabaseService = Depends(get_db_service)
):
    """
    Returns the profile of the user resolved from the request. Used by the
    client to restore a session.
    """
    return user_service.get_current_user(principal=principal, db=db)
