# /gradeflow/services/ticket_service.py

"""
Business logic for support tickets.

Any signed-in user can raise a ticket and see the tickets they raised;
admins see every ticket and are the only ones who can change a ticket's
status or notes. The submitter and the ticket's content never change after
creation.
"""

import uuid
from typing import List

from ..core.exceptions import ForbiddenError, NotFoundError, ValidationError
from ..core.logging_config import get_logger
from ..models.principal_model import Principal
from ..models.ticket_model import TicketCreate, TicketStatus, TicketUpdate
from . import visibility_policy
from .database_service import DatabaseService

logger = get_logger(__name__)


def submit_ticket(principal: Principal, ticket_data: TicketCreate, db: DatabaseService):
    if not visibility_policy.can_submit_ticket(principal):
        raise ForbiddenError("Not authorized to raise support tickets.")

    title = ticket_data.title.strip()
    if not title:
        raise ValidationError("Please enter a title.", field="title")
    description = ticket_data.description.strip()
    if not description:
        raise ValidationError("Please describe the issue.", field="description")
    category = ticket_data.category.strip()
    if not category:
        raise ValidationError("Please choose a category.", field="category")

    ticket_record = {
        "id": f"tkt_{uuid.uuid4().hex[:12]}",
        "title": title,
        "description": description,
        "category": category,
        "priority": ticket_data.priority.value,
        "status": TicketStatus.OPEN.value,
        "submitted_by_id": principal.id,
        "attachments": [a.model_dump(mode="json") for a in ticket_data.attachments],
    }
    new_ticket = db.add_ticket(ticket_record)
    logger.info(f"Ticket {new_ticket.id} ({new_ticket.priority}) submitted by {principal.id}.")
    return new_ticket


def list_tickets(principal: Principal, db: DatabaseService) -> List:
    return visibility_policy.filter_tickets(principal, db.get_all_tickets())


def get_ticket(principal: Principal, ticket_id: str, db: DatabaseService):
    ticket = db.get_ticket_by_id(ticket_id)
    if ticket is None or not visibility_policy.can_view_ticket(principal, ticket):
        raise NotFoundError("Ticket", ticket_id)
    return ticket


def update_ticket(principal: Principal, ticket_id: str, ticket_update: TicketUpdate, db: DatabaseService):
    """
    Admin-only. Applies whichever of `status` / `admin_notes` were sent and
    leaves the other untouched. An explicit `admin_notes: null` clears the
    notes; `status` can never be cleared.
    """
    if not visibility_policy.can_update_ticket(principal):
        logger.warning(f"User {principal.id} ({principal.role.value}) tried to update ticket {ticket_id}.")
        raise ForbiddenError("Only admins can update support tickets.")

    update_data = ticket_update.model_dump(exclude_unset=True, mode="json")
    if not update_data:
        raise ValidationError("No update data provided.")
    if "status" in update_data and update_data["status"] is None:
        raise ValidationError("'status' cannot be empty.", field="status")

    if db.get_ticket_by_id(ticket_id) is None:
        raise NotFoundError("Ticket", ticket_id)

    updated_ticket = db.update_ticket(ticket_id, update_data)
    logger.info(f"Ticket {ticket_id} updated by {principal.id}: {sorted(update_data)}.")
    return updated_ticket
