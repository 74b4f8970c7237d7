"""Identity store: persistence for voter accounts."""
from __future__ import annotations

from typing import Protocol

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ballot_box.core.errors import ConflictError, ErrorDetail
from ballot_box.models.user import User

from .base import Page, Pagination, normalize_paging, parse_id

__all__ = ["SqlUserRepository", "UserRepository"]


class UserRepository(Protocol):
    """Lookup, listing and creation of user accounts."""

    def get_by_id(self, user_id: str) -> User | None: ...

    def get_by_username(self, username: str) -> User | None: ...

    def list_users(self, page: int, size: int) -> Page[User]: ...

    def create(self, *, username: str, password_hash: str, initial_password: str) -> User: ...


class SqlUserRepository:
    """SQLAlchemy-backed identity store."""

    def __init__(self, db: Session) -> None:
        """Initialize the repository with a request-scoped session."""
        self.db = db

    def get_by_id(self, user_id: str) -> User | None:
        """Return a user by identifier; malformed identifiers yield None."""
        parsed = parse_id(user_id)
        if parsed is None:
            return None
        return self.db.get(User, parsed)

    def get_by_username(self, username: str) -> User | None:
        """Return the user with the given username."""
        return self.db.scalars(select(User).where(User.username == username)).first()

    def list_users(self, page: int, size: int) -> Page[User]:
        """Return users ordered by creation time, oldest first."""
        page, size = normalize_paging(page, size)
        total = self.db.scalar(select(func.count()).select_from(User)) or 0
        users = self.db.scalars(
            select(User)
            .order_by(User.created_at.asc(), User.id.asc())
            .offset((page - 1) * size)
            .limit(size)
        ).all()
        return Page(items=list(users), pagination=Pagination.build(page, size, int(total)))

    def create(self, *, username: str, password_hash: str, initial_password: str) -> User:
        """Insert a new user.

        Raises:
            ConflictError: If the username is already taken.
        """
        user = User(
            username=username,
            password_hash=password_hash,
            initial_password=initial_password,
        )
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError as err:
            self.db.rollback()
            raise ConflictError(
                "username already exists",
                ErrorDetail(field="username", error="must be unique"),
            ) from err
        self.db.refresh(user)
        return user
