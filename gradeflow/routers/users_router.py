# /gradeflow/routers/users_router.py

from typing import List, Optional

from fastapi import APIRouter, Depends, Response, status

from ..core.deps import get_current_principal
from ..models import user_model
from ..models.principal_model import Principal
from ..services import user_service
from ..services.database_service import DatabaseService, get_db_service

router = APIRouter()


@router.get("", response_model=List[user_model.User], summary="List Visible Users")
def get_users(
    principal: Principal = Depends(get_current_principal),
    db: DatabaseService = Depends(get_db_service)
):
    return user_service.list_users(principal=principal, db=db)


@router.get("/me/teacher", response_model=Optional[user_model.TeacherProfile], summary="Get My Assigned Teacher")
def get_my_teacher(
    principal: Principal = Depends(get_current_principal),
    db: DatabaseService = Depends(get_db_service)
):
    """Students only. Returns `null` while no teacher is assigned."""
    return user_service.get_my_teacher(principal=principal, db=db)


@router.get("/me/team", response_model=List[user_model.TeamMember], summary="List My Team Members")
def get_my_team(
    principal: Principal = Depends(get_current_principal),
    db: DatabaseService = Depends(get_db_service)
):
    return user_service.list_team_members(principal=principal, db=db)


@router.post("", response_model=user_model.User, status_code=status.HTTP_201_CREATED, summary="Register a User (Admin)")
def create_user(
    user_create: user_model.UserCreate,
    principal: Principal = Depends(get_current_principal),
    db: DatabaseService = Depends(get_db_service)
):
    return user_service.create_user(principal=principal, user_data=user_create, db=db)


@router.patch("/{user_id}", response_model=user_model.User, summary="Update a User (Admin)")
def update_user(
    user_id: str,
    user_update: user_model.UserUpdate,
    principal: Principal = Depends(get_current_principal),
    db: DatabaseService = Depends(get_db_service)
):
    return user_service.update_user(principal=principal, user_id=user_id, user_update=user_update, db=db)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a User (Admin)")
def delete_user(
    user_id: str,
    principal: Principal = Depends(get_current_principal),
    db: DatabaseService = Depends(get_db_service)
):
    user_service.delete_user(principal=principal, user_id=user_id, db=db)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
