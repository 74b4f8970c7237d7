# src/ballot_box/models/user.py
"""SQLAlchemy model for voter accounts."""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from ballot_box.db.session import Base
from ballot_box.db.time import utcnow


def new_id() -> str:
    """Return a fresh record identifier."""
    return str(uuid.uuid4())


class User(Base):
    """Voter account provisioned by an administrator.

    ``initial_password`` keeps the generated plaintext so it can be handed to
    the voter once; ``password_hash`` is what logins are checked against.
    """

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    username: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(Text, nullable=False)
    initial_password: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )
