# /gradeflow/services/database_helpers/ticket_repository_sql.py

from typing import List, Dict, Optional
from sqlalchemy.orm import Session

from gradeflow.db.models.ticket_models import SupportTicket


class TicketRepositorySQL:
    def __init__(self, db_session: Session):
        self.db = db_session

    def get_all_tickets(self) -> List[SupportTicket]:
        return self.db.query(SupportTicket).order_by(SupportTicket.created_at.desc(), SupportTicket.id.asc()).all()

    def get_ticket_by_id(self, ticket_id: str) -> Optional[SupportTicket]:
        return self.db.query(SupportTicket).filter(SupportTicket.id == ticket_id).first()

    def add_ticket(self, record: Dict) -> SupportTicket:
        new_ticket = SupportTicket(**record)
        self.db.add(new_ticket)
        self.db.commit()
        self.db.refresh(new_ticket)
        return new_ticket

    def update_ticket(self, ticket_id: str, data: Dict) -> Optional[SupportTicket]:
        db_ticket = self.get_ticket_by_id(ticket_id)
        if db_ticket:
            for key, value in data.items():
                setattr(db_ticket, key, value)
            self.db.commit()
            self.db.refresh(db_ticket)
        return db_ticket
