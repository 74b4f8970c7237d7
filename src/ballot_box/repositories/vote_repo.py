"""Vote store: one ballot per user, plus the tally."""
from __future__ import annotations

from datetime import datetime
from typing import Protocol

from sqlalchemy import func, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ballot_box.core.errors import ConflictError, ErrorDetail, InvalidArgumentError
from ballot_box.db.time import utcnow
from ballot_box.models.user import new_id
from ballot_box.models.vote import Vote
from ballot_box.schemas.vote import VoteSummary, VoteSummaryEntry

from .base import parse_id

__all__ = ["SqlVoteRepository", "VoteRepository", "build_summary"]

_UPSERT_INSERTS = {
    "sqlite": sqlite.insert,
    "postgresql": postgresql.insert,
}


class VoteRepository(Protocol):
    """Storage operations for ballots."""

    def distinct_options(self) -> list[str]: ...

    def get_by_user(self, user_id: str) -> Vote | None: ...

    def summary(self) -> VoteSummary: ...

    def upsert(self, user_id: str, option_name: str) -> str: ...


def build_summary(counts: list[tuple[str, int]]) -> VoteSummary:
    """Build a summary from ``(option_name, count)`` pairs.

    Entries are ordered by count descending, then option name ascending.
    """
    ordered = sorted(counts, key=lambda row: (-row[1], row[0]))
    total = sum(count for _, count in ordered)
    entries = [
        VoteSummaryEntry(
            option_name=name,
            count=count,
            percentage=100 * count / total,
        )
        for name, count in ordered
    ]
    return VoteSummary(
        winner=entries[0].option_name if entries else None,
        total_count=total,
        entries=entries,
    )


class SqlVoteRepository:
    """SQLAlchemy-backed vote store."""

    def __init__(self, db: Session) -> None:
        """Initialize the repository with a request-scoped session."""
        self.db = db

    def distinct_options(self) -> list[str]:
        """Return every option that currently holds at least one vote."""
        return list(self.db.scalars(select(Vote.option_name).distinct().order_by(Vote.option_name)))

    def get_by_user(self, user_id: str) -> Vote | None:
        """Return the user's vote; malformed identifiers yield None."""
        parsed = parse_id(user_id)
        if parsed is None:
            return None
        return self.db.scalars(
            select(Vote)
            .where(Vote.user_id == parsed)
            .execution_options(populate_existing=True)
        ).first()

    def summary(self) -> VoteSummary:
        """Aggregate current votes grouped by option."""
        count = func.count(Vote.id)
        rows = self.db.execute(
            select(Vote.option_name, count)
            .group_by(Vote.option_name)
            .order_by(count.desc(), Vote.option_name.asc())
        ).all()
        return build_summary([(name, int(total)) for name, total in rows])

    def upsert(self, user_id: str, option_name: str) -> str:
        """Insert or replace the user's vote and return its stable identifier.

        The first write sets ``created_at``; every write sets ``updated_at``.

        Raises:
            InvalidArgumentError: If ``user_id`` is not a valid identifier.
            ConflictError: If the store rejects the write, for example when
                ``user_id`` does not reference an existing user.
        """
        parsed = parse_id(user_id)
        if parsed is None:
            raise InvalidArgumentError(
                "invalid user id",
                ErrorDetail(field="user_id", error="not a valid identifier"),
            )

        now = utcnow()
        insert = _UPSERT_INSERTS.get(self.db.get_bind().dialect.name)
        try:
            if insert is None:
                self._upsert_orm(parsed, option_name, now)
            else:
                stmt = insert(Vote).values(
                    id=new_id(),
                    user_id=parsed,
                    option_name=option_name,
                    created_at=now,
                    updated_at=now,
                )
                stmt = stmt.on_conflict_do_update(
                    index_elements=["user_id"],
                    set_={
                        "option_name": stmt.excluded.option_name,
                        "updated_at": stmt.excluded.updated_at,
                    },
                )
                self.db.execute(stmt)
            self.db.commit()
        except IntegrityError as err:
            self.db.rollback()
            raise ConflictError(
                "vote rejected by the store",
                ErrorDetail(field="user_id", error="must reference an existing user"),
            ) from err

        vote_id = self.db.scalar(select(Vote.id).where(Vote.user_id == parsed))
        if vote_id is None:
            raise RuntimeError("vote missing after upsert")
        return vote_id

    def _upsert_orm(self, user_id: str, option_name: str, now: datetime) -> None:
        # Dialects without ON CONFLICT rely on the unique constraint to reject races.
        vote = self.db.scalars(select(Vote).where(Vote.user_id == user_id)).first()
        if vote is None:
            self.db.add(
                Vote(
                    user_id=user_id,
                    option_name=option_name,
                    created_at=now,
                    updated_at=now,
                )
            )
        else:
            vote.option_name = option_name
            vote.updated_at = now
        self.db.flush()
