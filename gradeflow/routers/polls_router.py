# /gradeflow/routers/polls_router.py

from typing import List, Optional

from fastapi import APIRouter, Depends, status

from ..core.deps import get_current_principal
from ..models import poll_model
from ..models.principal_model import Principal
from ..services import poll_engine
from ..services.database_service import DatabaseService, get_db_service

router = APIRouter()

# --- POLL COLLECTION ENDPOINTS (/api/polls) ---

@router.get("", response_model=List[poll_model.Poll], summary="List Visible Polls")
def get_polls(
    status_filter: Optional[poll_model.PollStatus] = None,
    principal: Principal = Depends(get_current_principal),
    db: DatabaseService = Depends(get_db_service)
):
    """Newest first. Pass `status_filter=active` or `closed` to narrow the list."""
    return poll_engine.list_polls(principal=principal, db=db, status=status_filter)


@router.post("", response_model=poll_model.Poll, status_code=status.HTTP_201_CREATED, summary="Create a Poll")
def create_poll(
    poll_create: poll_model.PollCreate,
    principal: Principal = Depends(get_current_principal),
    db: DatabaseService = Depends(get_db_service)
):
    return poll_engine.create_poll(principal=principal, poll_data=poll_create, db=db)

# --- INDIVIDUAL POLL ENDPOINTS (/api/polls/{poll_id}) ---

@router.get("/{poll_id}", response_model=poll_model.Poll, summary="Get a Single Poll")
def get_poll(
    poll_id: str,
    principal: Principal = Depends(get_current_principal),
    db: DatabaseService = Depends(get_db_service)
):
    return poll_engine.get_poll(principal=principal, poll_id=poll_id, db=db)


@router.get("/{poll_id}/results", response_model=poll_model.PollTally, summary="Get Poll Results")
def get_poll_results(
    poll_id: str,
    principal: Principal = Depends(get_current_principal),
    db: DatabaseService = Depends(get_db_service)
):
    poll = poll_engine.get_poll(principal=principal, poll_id=poll_id, db=db)
    return poll_engine.tally(poll)


@router.post("/{poll_id}/vote", response_model=poll_model.VoteResponse, summary="Vote in a Poll")
def vote_in_poll(
    poll_id: str,
    vote_request: poll_model.VoteRequest,
    principal: Principal = Depends(get_current_principal),
    db: DatabaseService = Depends(get_db_service)
):
    poll_engine.vote(principal=principal, poll_id=poll_id, option_id=vote_request.option_id, db=db)
    return poll_model.VoteResponse(message="Vote recorded", poll_id=poll_id, option_id=vote_request.option_id)


@router.post("/{poll_id}/close", response_model=poll_model.Poll, summary="Close a Poll")
def close_poll(
    poll_id: str,
    principal: Principal = Depends(get_current_principal),
    db: DatabaseService = Depends(get_db_service)
):
    return poll_engine.close_poll(principal=principal, poll_id=poll_id, db=db)
