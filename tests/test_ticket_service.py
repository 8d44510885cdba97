# /tests/test_ticket_service.py

import pytest
from unittest.mock import MagicMock

from gradeflow.core.exceptions import ForbiddenError, NotFoundError, ValidationError
from gradeflow.models.principal_model import Principal, Role
from gradeflow.models.ticket_model import Attachment, TicketCreate, TicketPriority, TicketStatus, TicketUpdate
from gradeflow.services import ticket_service


@pytest.fixture
def student_ticket(db_service, people, as_principal):
    return ticket_service.submit_ticket(
        as_principal(people.student_1),
        TicketCreate(
            title="Cannot upload homework",
            description="The upload button does nothing.",
            category="Technical",
            attachments=[
                Attachment(name="screenshot.png", type="file", url="data:image/png;base64,AAAA", mime_type="image/png"),
                Attachment(name="Docs", type="link", url="https://example.edu/help"),
            ],
        ),
        db_service,
    )


def test_submitted_ticket_defaults(student_ticket, people):
    assert student_ticket.status == TicketStatus.OPEN.value
    assert student_ticket.priority == TicketPriority.MEDIUM.value
    assert student_ticket.submitted_by_id == people.student_1.id
    assert [a["type"] for a in student_ticket.attachments] == ["file", "link"]
    assert student_ticket.attachments[1]["mime_type"] is None


def test_ticket_visibility(db_service, people, as_principal, student_ticket):
    teacher_ticket = ticket_service.submit_ticket(
        as_principal(people.teacher_1),
        TicketCreate(title="Projector", description="Broken in room 4", category="Facilities", priority="high"),
        db_service,
    )

    admin_view = {t.id for t in ticket_service.list_tickets(as_principal(people.admin), db_service)}
    assert admin_view == {student_ticket.id, teacher_ticket.id}
    assert [t.id for t in ticket_service.list_tickets(as_principal(people.student_1), db_service)] == [student_ticket.id]
    assert [t.id for t in ticket_service.list_tickets(as_principal(people.teacher_1), db_service)] == [teacher_ticket.id]

    with pytest.raises(NotFoundError):
        ticket_service.get_ticket(as_principal(people.student_2), student_ticket.id, db_service)


def test_admin_updates_only_the_fields_sent(db_service, people, as_principal, student_ticket):
    admin = as_principal(people.admin)
    updated = ticket_service.update_ticket(
        admin, student_ticket.id, TicketUpdate(status=TicketStatus.IN_PROGRESS), db_service
    )
    assert updated.status == TicketStatus.IN_PROGRESS.value
    assert updated.admin_notes is None

    updated = ticket_service.update_ticket(
        admin, student_ticket.id, TicketUpdate(admin_notes="Cache cleared, please retry."), db_service
    )
    assert updated.status == TicketStatus.IN_PROGRESS.value
    assert updated.admin_notes == "Cache cleared, please retry."
    # Content and submitter never change.
    assert updated.title == "Cannot upload homework"
    assert updated.submitted_by_id == people.student_1.id


def test_non_admin_cannot_update_tickets(db_service, people, as_principal, student_ticket):
    for user in (people.student_1, people.teacher_1):
        with pytest.raises(ForbiddenError):
            ticket_service.update_ticket(
                as_principal(user), student_ticket.id, TicketUpdate(status=TicketStatus.RESOLVED), db_service
            )


def test_update_checks():
    """Uses a mocked DatabaseService: an empty update never reaches the store."""
    mock_db = MagicMock()
    admin = Principal(id="a1", role=Role.ADMIN)

    with pytest.raises(ValidationError):
        ticket_service.update_ticket(admin, "tkt_1", TicketUpdate(), mock_db)
    mock_db.update_ticket.assert_not_called()

    mock_db.get_ticket_by_id.return_value = None
    with pytest.raises(NotFoundError):
        ticket_service.update_ticket(admin, "tkt_missing", TicketUpdate(status=TicketStatus.RESOLVED), mock_db)
    mock_db.update_ticket.assert_not_called()


def test_blank_title_is_rejected(db_service, people, as_principal):
    with pytest.raises(ValidationError):
        ticket_service.submit_ticket(
            as_principal(people.student_1),
            TicketCreate(title="   ", description="x", category="Other"),
            db_service,
        )


def test_whitespace_category_is_rejected(db_service, people, as_principal):
    with pytest.raises(ValidationError) as exc_info:
        ticket_service.submit_ticket(
            as_principal(people.student_1),
            TicketCreate(title="Locker", description="Jammed", category="   "),
            db_service,
        )
    assert exc_info.value.details == {"field": "category"}


def test_admin_can_clear_notes_with_explicit_null(db_service, people, as_principal, student_ticket):
    admin = as_principal(people.admin)
    ticket_service.update_ticket(admin, student_ticket.id, TicketUpdate(admin_notes="Looking into it."), db_service)

    cleared = ticket_service.update_ticket(
        admin, student_ticket.id, TicketUpdate.model_validate({"admin_notes": None}), db_service
    )
    assert cleared.admin_notes is None
    assert cleared.status == TicketStatus.OPEN.value


def test_explicit_null_status_is_rejected(db_service, people, as_principal, student_ticket):
    with pytest.raises(ValidationError):
        ticket_service.update_ticket(
            as_principal(people.admin), student_ticket.id, TicketUpdate.model_validate({"status": None}), db_service
        )
    assert db_service.get_ticket_by_id(student_ticket.id).status == TicketStatus.OPEN.value
