"""Credential service: login flows and access-token issuance/verification."""
from __future__ import annotations

import logging
import secrets
from collections.abc import Callable
from datetime import datetime, timedelta
from typing import Protocol

from jose import JWTError, jwt
from pydantic import ValidationError

from ballot_box.core.errors import InvalidCredentialsError, UnauthorizedError
from ballot_box.core.security import verify_password
from ballot_box.core.settings import Settings
from ballot_box.db.time import utcnow
from ballot_box.repositories.user_repo import UserRepository
from ballot_box.schemas.auth import AccessClaims, AccessToken, Role

logger = logging.getLogger(__name__)

TOKEN_ISSUER = "ballot-box-backend"
TOKEN_AUDIENCE = "ballot-box-backend"
ADMIN_SUBJECT = "admin"

__all__ = [
    "ADMIN_SUBJECT",
    "TOKEN_AUDIENCE",
    "TOKEN_ISSUER",
    "AuthService",
    "CredentialService",
]


class CredentialService(Protocol):
    """Issues and verifies role-scoped access tokens."""

    def login(self, username: str, password: str) -> AccessToken: ...

    def login_admin(self, username: str, password: str) -> AccessToken: ...

    def verify(self, token: str) -> AccessClaims: ...


class AuthService:
    """JWT-backed credential service.

    No session state is kept server-side; the signed token is the only
    carrier of authentication state.
    """

    def __init__(
        self,
        settings: Settings,
        users: UserRepository,
        *,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self.settings = settings
        self.users = users
        self._clock = clock

    def issue_token(self, subject: str, role: Role) -> AccessToken:
        """Sign a token for ``subject`` carrying ``role``."""
        now = self._clock()
        expires = now + timedelta(hours=self.settings.access_token_duration_hours)
        issued_at = int(now.timestamp())
        expires_at = int(expires.timestamp())
        claims: dict[str, object] = {
            "sub": subject,
            "iss": TOKEN_ISSUER,
            "aud": TOKEN_AUDIENCE,
            "iat": issued_at,
            "nbf": issued_at,
            "exp": expires_at,
            "jti": "",
            "typ": role.value,
        }
        token: str = jwt.encode(
            claims,
            self.settings.jwt_secret,
            algorithm=self.settings.jwt_algorithm,
        )
        return AccessToken(access_token=token, valid_until=expires_at)

    def login(self, username: str, password: str) -> AccessToken:
        """Authenticate a voter by username and password.

        Raises:
            InvalidCredentialsError: On unknown user, wrong password or an
                unusable stored hash.
        """
        user = self.users.get_by_username(username)
        if user is None:
            logger.info("User login rejected")
            raise InvalidCredentialsError()
        try:
            matches = verify_password(password, user.password_hash)
        except (TypeError, ValueError) as err:
            logger.info("User login rejected")
            raise InvalidCredentialsError() from err
        if not matches:
            logger.info("User login rejected")
            raise InvalidCredentialsError()
        return self.issue_token(user.id, Role.USER)

    def login_admin(self, username: str, password: str) -> AccessToken:
        """Authenticate against the configured administrator account."""
        username_ok = secrets.compare_digest(
            username.encode("utf-8"), self.settings.admin_username.encode("utf-8")
        )
        password_ok = secrets.compare_digest(
            password.encode("utf-8"), self.settings.admin_password.encode("utf-8")
        )
        if not (username_ok and password_ok):
            logger.info("Admin login rejected")
            raise InvalidCredentialsError()
        return self.issue_token(ADMIN_SUBJECT, Role.ADMIN)

    def verify(self, token: str) -> AccessClaims:
        """Decode and validate a token.

        Raises:
            UnauthorizedError: If the token is malformed, wrongly signed,
                expired, not yet valid, or carries an unknown role.
        """
        try:
            payload = jwt.decode(
                token,
                self.settings.jwt_secret,
                algorithms=[self.settings.jwt_algorithm],
                audience=TOKEN_AUDIENCE,
                issuer=TOKEN_ISSUER,
            )
            return AccessClaims.model_validate(payload)
        except (JWTError, ValidationError, AttributeError) as err:
            raise UnauthorizedError("Unauthorized: invalid access token") from err
