"""Admin service: voter provisioning and results."""
from __future__ import annotations

import logging

from ballot_box.core.errors import ErrorDetail, InvalidArgumentError
from ballot_box.core.security import GENERATED_PASSWORD_LENGTH, generate_password, hash_password
from ballot_box.models.user import User
from ballot_box.repositories.base import Page
from ballot_box.repositories.user_repo import UserRepository
from ballot_box.repositories.vote_repo import VoteRepository
from ballot_box.schemas.vote import VoteSummary

logger = logging.getLogger(__name__)


class AdminService:
    """Operations reserved for the administrator."""

    def __init__(
        self,
        users: UserRepository,
        votes: VoteRepository,
        *,
        salt_rounds: int,
    ) -> None:
        self.users = users
        self.votes = votes
        self.salt_rounds = salt_rounds

    def list_users(self, page: int, size: int) -> Page[User]:
        return self.users.list_users(page, size)

    def get_summary(self) -> VoteSummary:
        return self.votes.summary()

    def create_user(self, username: str) -> User:
        """Provision a voter with a freshly generated password.

        The plaintext password is stored next to its hash so it can be
        handed to the voter.

        Raises:
            InvalidArgumentError: If the username is already taken.
            ConflictError: If a concurrent request claimed the username first.
        """
        if self.users.get_by_username(username) is not None:
            raise InvalidArgumentError(
                "username already exists",
                ErrorDetail(field="username", error="must be unique"),
            )

        password = generate_password(GENERATED_PASSWORD_LENGTH)
        user = self.users.create(
            username=username,
            password_hash=hash_password(password, self.salt_rounds),
            initial_password=password,
        )
        logger.info("Created user %s", user.username)
        return user
