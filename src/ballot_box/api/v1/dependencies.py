"""Shared API dependencies for authentication and service wiring."""

from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from ballot_box.core.errors import ForbiddenError, UnauthorizedError
from ballot_box.core.settings import Settings
from ballot_box.db.session import get_db
from ballot_box.models import User
from ballot_box.repositories import SqlUserRepository, SqlVoteRepository
from ballot_box.schemas.auth import AccessClaims, Role
from ballot_box.services import AdminService, AuthService, VotingService

# Missing headers are reported by get_claims so every auth failure is a 401.
bearer_scheme = HTTPBearer(auto_error=False)

SessionDep = Annotated[Session, Depends(get_db)]


def get_settings(request: Request) -> Settings:
    """Return the settings the running application was built with."""
    return request.app.state.settings


SettingsDep = Annotated[Settings, Depends(get_settings)]


def get_auth_service(db: SessionDep, settings: SettingsDep) -> AuthService:
    return AuthService(settings, SqlUserRepository(db))


def get_voting_service(db: SessionDep) -> VotingService:
    return VotingService(SqlVoteRepository(db))


def get_admin_service(db: SessionDep, settings: SettingsDep) -> AdminService:
    return AdminService(
        SqlUserRepository(db),
        SqlVoteRepository(db),
        salt_rounds=settings.salt_rounds,
    )


AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
VotingServiceDep = Annotated[VotingService, Depends(get_voting_service)]
AdminServiceDep = Annotated[AdminService, Depends(get_admin_service)]


def get_claims(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    auth_service: AuthServiceDep,
) -> AccessClaims:
    """Verify the bearer token and return its claims.

    Raises:
        UnauthorizedError: If the header is missing or the token is invalid.
    """
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError("Unauthorized: authorization header invalid")
    return auth_service.verify(credentials.credentials)


ClaimsDep = Annotated[AccessClaims, Depends(get_claims)]


def require_role(role: Role):
    """Build a dependency that rejects tokens not carrying ``role``."""

    def _check(claims: ClaimsDep) -> AccessClaims:
        if claims.role is not role:
            raise ForbiddenError(f"Only {role.value} can access the resource")
        return claims

    return _check


AdminClaimsDep = Annotated[AccessClaims, Depends(require_role(Role.ADMIN))]
UserClaimsDep = Annotated[AccessClaims, Depends(require_role(Role.USER))]


def get_current_user(claims: UserClaimsDep, db: SessionDep) -> User:
    """Resolve the voter behind a USER token.

    Raises:
        UnauthorizedError: If the token's subject no longer exists.
    """
    user = SqlUserRepository(db).get_by_id(claims.sub)
    if user is None:
        raise UnauthorizedError("Unauthorized: user not found")
    return user


CurrentUserDep = Annotated[User, Depends(get_current_user)]
