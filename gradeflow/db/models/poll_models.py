# /gradeflow/db/models/poll_models.py

"""
This module defines the SQLAlchemy ORM models for polls.

A poll owns an ordered list of options, and each option owns the votes cast
for it. Every vote row also carries its `poll_id` so that the database can
enforce the "one vote per user per poll" rule with a single unique index,
independent of which option the vote is for.
"""

from sqlalchemy import Column, String, Integer, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ..base_class import Base


class Poll(Base):
    id = Column(String, primary_key=True, index=True)
    title = Column(String, nullable=False)
    description = Column(String, nullable=False, default="")
    created_by_id = Column(String, nullable=False, index=True)
    created_by_role = Column(String, nullable=False)
    target_audience = Column(String, nullable=False, default="students")
    status = Column(String, index=True, nullable=False, default="active")
    expires_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    options = relationship(
        "PollOption",
        back_populates="poll",
        order_by="PollOption.position",
        cascade="all, delete-orphan",
    )
    # `created_by_id` is a plain string, so the creator is joined read-only and
    # is None once the user has been deleted.
    creator = relationship(
        "User",
        primaryjoin="foreign(Poll.created_by_id) == remote(User.id)",
        viewonly=True,
    )

    @property
    def created_by_name(self):
        return self.creator.name if self.creator is not None else None


class PollOption(Base):
    __tablename__ = "poll_options"

    id = Column(String, primary_key=True, index=True)
    poll_id = Column(String, ForeignKey("polls.id"), nullable=False, index=True)
    text = Column(String, nullable=False)
    position = Column(Integer, nullable=False)

    poll = relationship("Poll", back_populates="options")
    votes = relationship("PollVote", back_populates="option", cascade="all, delete-orphan")

    @property
    def voter_ids(self):
        return [vote.user_id for vote in self.votes]


class PollVote(Base):
    __tablename__ = "poll_votes"
    __table_args__ = (
        UniqueConstraint("poll_id", "user_id", name="uq_poll_votes_poll_user"),
    )

    id = Column(String, primary_key=True, index=True)
    poll_id = Column(String, ForeignKey("polls.id"), nullable=False, index=True)
    option_id = Column(String, ForeignKey("poll_options.id"), nullable=False, index=True)
    # Plain string, not a foreign key: votes outlive deleted users.
    user_id = Column(String, nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    option = relationship("PollOption", back_populates="votes")
