# /gradeflow/routers/tickets_router.py

from typing import List

from fastapi import APIRouter, Depends, status

from ..core.deps import get_current_principal
from ..models import ticket_model
from ..models.principal_model import Principal
from ..services import ticket_service
from ..services.database_service import DatabaseService, get_db_service

router = APIRouter()


@router.get("", response_model=List[ticket_model.SupportTicket], summary="List Visible Support Tickets")
def get_tickets(
    principal: Principal = Depends(get_current_principal),
    db: DatabaseService = Depends(get_db_service)
):
    return ticket_service.list_tickets(principal=principal, db=db)


@router.post("", response_model=ticket_model.SupportTicket, status_code=status.HTTP_201_CREATED, summary="Raise a Support Ticket")
def submit_ticket(
    ticket_create: ticket_model.TicketCreate,
    principal: Principal = Depends(get_current_principal),
    db: DatabaseService = Depends(get_db_service)
):
    return ticket_service.submit_ticket(principal=principal, ticket_data=ticket_create, db=db)


@router.get("/{ticket_id}", response_model=ticket_model.SupportTicket, summary="Get a Single Support Ticket")
def get_ticket(
    ticket_id: str,
    principal: Principal = Depends(get_current_principal),
    db: DatabaseService = Depends(get_db_service)
):
    return ticket_service.get_ticket(principal=principal, ticket_id=ticket_id, db=db)


@router.patch("/{ticket_id}", response_model=ticket_model.SupportTicket, summary="Update a Support Ticket (Admin)")
def update_ticket(
    ticket_id: str,
    ticket_update: ticket_model.TicketUpdate,
    principal: Principal = Depends(get_current_principal),
    db: DatabaseService = Depends(get_db_service)
):
    return ticket_service.update_ticket(principal=principal, ticket_id=ticket_id, ticket_update=ticket_update, db=db)
