# src/ballot_box/models/vote.py
"""Model capturing each user's single ballot."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from ballot_box.db.session import Base
from ballot_box.db.time import utcnow

from .user import new_id


class Vote(Base):
    """Per-user vote for a named option.

    The unique constraint on ``user_id`` is what upserts conflict on, so a
    user never holds more than one row.
    """

    __tablename__ = "votes"
    __table_args__ = (Index("ix_votes_option_name", "option_name"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )
    option_name: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
