# /gradeflow/models/poll_model.py

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, AliasChoices

from .principal_model import Role


class PollStatus(str, Enum):
    ACTIVE = "active"
    CLOSED = "closed"


class TargetAudience(str, Enum):
    STUDENTS = "students"
    STUDENTS_AND_STAFF = "students-and-staff"


# Tuple, not set: ORM rows hold plain strings, which hash differently from the enum members.
STUDENT_AUDIENCES = (TargetAudience.STUDENTS, TargetAudience.STUDENTS_AND_STAFF)


# --- Request Models ---

class PollCreate(BaseModel):
    """
    Payload for creating a poll. `options` is a list of option texts; blank
    entries are dropped by the service before the 2..N count is checked.
    `target_audience` is only honored for admins.
    """
    title: str
    description: str = ""
    options: List[str]
    target_audience: TargetAudience = TargetAudience.STUDENTS
    expires_at: Optional[datetime] = None


class VoteRequest(BaseModel):
    option_id: str


class VoteResponse(BaseModel):
    message: str
    poll_id: str
    option_id: str


# --- Response Models ---

class PollOption(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    text: str
    # ORM options expose their voters as `voter_ids`.
    votes: List[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("voter_ids", "votes"),
    )


class Poll(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    description: str
    options: List[PollOption]
    created_by_id: str
    created_by_name: Optional[str] = None
    created_by_role: Role
    target_audience: TargetAudience
    status: PollStatus
    expires_at: Optional[datetime] = None
    created_at: Optional[datetime] = None


class OptionTally(BaseModel):
    option_id: str
    text: str
    votes: int
    percentage: int = Field(..., ge=0, le=100)


class PollTally(BaseModel):
    poll_id: str
    total_votes: int
    options: List[OptionTally]
