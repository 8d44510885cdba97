# /gradeflow/services/database_helpers/poll_repository_sql.py

"""
This module contains the SQLAlchemy queries for polls, their options and
their votes.

`add_vote` is the single write path for votes. The `poll_votes` table has a
unique index on (poll_id, user_id), so if two requests from the same user
race past the service-level "already voted" check, the database rejects the
second insert and this repository reports it as `AlreadyVotedError`.
"""

from typing import List, Dict, Optional
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from gradeflow.core.exceptions import AlreadyVotedError
from gradeflow.db.models.poll_models import Poll, PollOption, PollVote


class PollRepositorySQL:
    def __init__(self, db_session: Session):
        self.db = db_session

    def _query(self):
        return self.db.query(Poll).options(
            selectinload(Poll.options).selectinload(PollOption.votes),
            selectinload(Poll.creator),
        )

    def get_all_polls(self) -> List[Poll]:
        return self._query().order_by(Poll.created_at.desc(), Poll.id.asc()).all()

    def get_poll_by_id(self, poll_id: str) -> Optional[Poll]:
        return self._query().filter(Poll.id == poll_id).first()

    def add_poll(self, record: Dict, option_records: List[Dict]) -> Poll:
        """
        Creates a poll together with its options in one transaction.
        Option order is preserved through the `position` column.
        """
        new_poll = Poll(**record)
        for position, option_record in enumerate(option_records):
            new_poll.options.append(PollOption(position=position, **option_record))
        self.db.add(new_poll)
        self.db.commit()
        self.db.refresh(new_poll)
        return new_poll

    def update_poll(self, poll_id: str, data: Dict) -> Optional[Poll]:
        db_poll = self.get_poll_by_id(poll_id)
        if db_poll:
            for key, value in data.items():
                setattr(db_poll, key, value)
            self.db.commit()
            self.db.refresh(db_poll)
        return db_poll

    def has_user_voted(self, poll_id: str, user_id: str) -> bool:
        return (
            self.db.query(PollVote.id)
            .filter(PollVote.poll_id == poll_id, PollVote.user_id == user_id)
            .first()
            is not None
        )

    def add_vote(self, record: Dict) -> PollVote:
        new_vote = PollVote(**record)
        self.db.add(new_vote)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise AlreadyVotedError(record["poll_id"])
        self.db.refresh(new_vote)
        return new_vote
