# /gradeflow/services/poll_engine.py

"""
This service owns the poll lifecycle and the vote-recording rules.

A poll is `active` until it is closed, either explicitly by its creator (or
an admin) or implicitly once its optional `expires_at` has passed. `closed`
is terminal. A user may vote at most once per poll, across all of its
options; changing a vote is not supported.

Authorization decisions are delegated to `visibility_policy`; persistence
goes through the injected `DatabaseService`.
"""

import uuid
from datetime import datetime, timezone
from typing import List, Optional

from ..core.config import settings
from ..core.exceptions import (
    AlreadyVotedError,
    ForbiddenError,
    InvalidOptionError,
    InvalidStateError,
    NotFoundError,
    PollClosedError,
    ValidationError,
)
from ..core.logging_config import get_logger
from ..models.poll_model import PollCreate, PollStatus, PollTally, OptionTally, TargetAudience
from ..models.principal_model import Principal
from . import visibility_policy
from .database_service import DatabaseService

logger = get_logger(__name__)


def _new_id(prefix: str) -> str:
    return f"{prefix}_{uuid.uuid4().hex[:12]}"


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes even for timezone-aware columns.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def is_expired(poll, now: Optional[datetime] = None) -> bool:
    if poll.expires_at is None:
        return False
    now = now or datetime.now(timezone.utc)
    return _as_utc(poll.expires_at) <= now


def percentage(part: int, total: int) -> int:
    """Integer percentage rounded half up; 0 when total is 0."""
    if total <= 0:
        return 0
    return (200 * part + total) // (2 * total)


# --- Pure Read ---

def tally(poll) -> PollTally:
    """
    Per-option vote counts and percentages. Works on ORM polls and on
    `Poll` response models alike. Percentages are rounded independently, so
    they do not always add up to exactly 100.
    """
    counts = [(option.id, option.text, len(option.votes)) for option in poll.options]
    total = sum(count for _, _, count in counts)
    return PollTally(
        poll_id=poll.id,
        total_votes=total,
        options=[
            OptionTally(option_id=option_id, text=text, votes=count, percentage=percentage(count, total))
            for option_id, text, count in counts
        ],
    )


# --- Lifecycle Helpers ---

def _expire_if_due(poll, db: DatabaseService):
    """Persists the closed status of an active poll whose expiry has passed."""
    if poll.status == PollStatus.ACTIVE and is_expired(poll):
        logger.info(f"Poll {poll.id} passed its expiry; closing it.")
        return db.update_poll(poll.id, {"status": PollStatus.CLOSED.value})
    return poll


def _clean_option_texts(options: List[str]) -> List[str]:
    return [text.strip() for text in options if text and text.strip()]


# --- Public Service Functions ---

def create_poll(principal: Principal, poll_data: PollCreate, db: DatabaseService):
    """
    Creates an active poll with empty vote sets.

    Blank option texts are discarded before counting, and between
    POLL_MIN_OPTIONS and POLL_MAX_OPTIONS must remain. Teachers cannot pick
    an audience: their polls always target students.
    """
    if not visibility_policy.can_create_poll(principal):
        logger.warning(f"User {principal.id} ({principal.role.value}) tried to create a poll.")
        raise ForbiddenError("Only admins and teachers can create polls.")

    title = poll_data.title.strip()
    if not title:
        raise ValidationError("Please enter a title.", field="title")

    option_texts = _clean_option_texts(poll_data.options)
    if len(option_texts) < settings.POLL_MIN_OPTIONS:
        raise ValidationError(
            f"Please provide at least {settings.POLL_MIN_OPTIONS} options.", field="options"
        )
    if len(option_texts) > settings.POLL_MAX_OPTIONS:
        raise ValidationError(
            f"A poll can have at most {settings.POLL_MAX_OPTIONS} options.", field="options"
        )

    if poll_data.expires_at is not None and is_expired(poll_data):
        raise ValidationError("The expiry date must be in the future.", field="expires_at")

    if visibility_policy.can_choose_poll_audience(principal):
        target_audience = poll_data.target_audience
    else:
        target_audience = TargetAudience.STUDENTS

    poll_record = {
        "id": _new_id("pol"),
        "title": title,
        "description": poll_data.description.strip(),
        "created_by_id": principal.id,
        "created_by_role": principal.role.value,
        "target_audience": target_audience.value,
        "status": PollStatus.ACTIVE.value,
        "expires_at": poll_data.expires_at,
    }
    option_records = [{"id": _new_id("opt"), "text": text} for text in option_texts]

    new_poll = db.add_poll(poll_record, option_records)
    logger.info(
        f"Poll {new_poll.id} created by {principal.id} with {len(option_records)} options "
        f"for audience '{target_audience.value}'."
    )
    return new_poll


def get_poll(principal: Principal, poll_id: str, db: DatabaseService):
    """
    Returns a single poll. Polls the principal may not see are reported as
    missing so their existence is not revealed.
    """
    poll = db.get_poll_by_id(poll_id)
    if poll is None or not visibility_policy.can_view_poll(principal, poll):
        raise NotFoundError("Poll", poll_id)
    return _expire_if_due(poll, db)


def list_polls(principal: Principal, db: DatabaseService, status: Optional[PollStatus] = None) -> List:
    """Visible polls, newest first, optionally narrowed to one status."""
    visible = visibility_policy.filter_polls(principal, db.get_all_polls())
    visible = [_expire_if_due(poll, db) for poll in visible]
    if status is not None:
        visible = [poll for poll in visible if poll.status == status]
    return visible


def vote(principal: Principal, poll_id: str, option_id: str, db: DatabaseService):
    """
    Records the principal's single vote in a poll and returns the updated
    poll.

    Raises, in this order of precedence: NotFoundError, PollClosedError,
    AlreadyVotedError, InvalidOptionError.
    """
    poll = get_poll(principal, poll_id, db)

    if poll.status == PollStatus.CLOSED:
        raise PollClosedError(poll_id)

    if any(principal.id in option.voter_ids for option in poll.options):
        logger.warning(f"User {principal.id} tried to vote twice in poll {poll_id}.")
        raise AlreadyVotedError(poll_id)

    if not any(option.id == option_id for option in poll.options):
        raise InvalidOptionError(poll_id, option_id)

    # The unique (poll_id, user_id) index backs up the check above when two
    # requests from the same user race each other.
    db.add_vote({
        "id": _new_id("vote"),
        "poll_id": poll_id,
        "option_id": option_id,
        "user_id": principal.id,
    })
    logger.info(f"Vote recorded in poll {poll_id} by {principal.id}.")
    return db.get_poll_by_id(poll_id)


def close_poll(principal: Principal, poll_id: str, db: DatabaseService):
    """
    Closes an active poll. Only its creator or an admin may do so, and
    closing an already closed poll is rejected with InvalidStateError every
    time.
    """
    poll = db.get_poll_by_id(poll_id)
    if poll is None:
        raise NotFoundError("Poll", poll_id)

    if not visibility_policy.can_close_poll(principal, poll):
        logger.warning(f"User {principal.id} tried to close poll {poll_id} without permission.")
        raise ForbiddenError("Only the poll's creator or an admin can close it.")

    if poll.status == PollStatus.CLOSED:
        raise InvalidStateError(
            "Poll is already closed.",
            current=PollStatus.CLOSED.value,
            requested=PollStatus.CLOSED.value,
        )

    closed_poll = db.update_poll(poll_id, {"status": PollStatus.CLOSED.value})
    logger.info(f"Poll {poll_id} closed by {principal.id}.")
    return closed_poll
