# /gradeflow/db/models/ticket_models.py

from sqlalchemy import Column, String, JSON, DateTime
from sqlalchemy.sql import func

from ..base_class import Base


class SupportTicket(Base):
    """
    SQLAlchemy model representing a support request raised by a teacher or
    student. Attachments are stored inline as a JSON list of
    {name, type, url, mime_type} objects.
    """
    __tablename__ = "support_tickets"

    id = Column(String, primary_key=True, index=True)
    title = Column(String, nullable=False)
    description = Column(String, nullable=False)
    category = Column(String, nullable=False)
    priority = Column(String, nullable=False, default="medium")
    status = Column(String, index=True, nullable=False, default="open")
    submitted_by_id = Column(String, nullable=False, index=True)
    attachments = Column(JSON, nullable=False, default=list)
    admin_notes = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
