# /gradeflow/models/ticket_model.py

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class TicketPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class TicketStatus(str, Enum):
    OPEN = "open"
    IN_PROGRESS = "in-progress"
    RESOLVED = "resolved"


class AttachmentType(str, Enum):
    FILE = "file"
    LINK = "link"


class Attachment(BaseModel):
    name: str = Field(..., min_length=1)
    type: AttachmentType
    url: str = Field(..., min_length=1)
    mime_type: Optional[str] = None


class TicketCreate(BaseModel):
    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    category: str = Field(..., min_length=1)
    priority: TicketPriority = TicketPriority.MEDIUM
    attachments: List[Attachment] = Field(default_factory=list)


class TicketUpdate(BaseModel):
    """Admin-only update. Submitter and content are immutable."""
    status: Optional[TicketStatus] = None
    admin_notes: Optional[str] = None


class SupportTicket(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    description: str
    category: str
    priority: TicketPriority
    status: TicketStatus
    submitted_by_id: str
    attachments: List[Attachment] = Field(default_factory=list)
    admin_notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
