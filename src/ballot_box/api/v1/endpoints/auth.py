# src/ballot_box/api/v1/endpoints/auth.py
"""Authentication endpoints for the Ballot Box API."""

from __future__ import annotations

from fastapi import APIRouter, status

from ballot_box.core.errors import UnauthorizedError
from ballot_box.repositories import SqlUserRepository
from ballot_box.schemas.auth import AccessToken, LoginRequest, MeResponse, Role

from ..dependencies import AuthServiceDep, ClaimsDep, SessionDep, SettingsDep

router = APIRouter(prefix="/auth", tags=["authentication"])


@router.post(
    "/user/login",
    summary="Authenticate a voter",
    status_code=status.HTTP_200_OK,
    response_model=AccessToken,
)
async def login_user(payload: LoginRequest, auth_service: AuthServiceDep) -> AccessToken:
    """Exchange voter credentials for a USER access token."""
    return auth_service.login(payload.username, payload.password)


@router.post(
    "/admin/login",
    summary="Authenticate the administrator",
    status_code=status.HTTP_200_OK,
    response_model=AccessToken,
)
async def login_admin(payload: LoginRequest, auth_service: AuthServiceDep) -> AccessToken:
    """Exchange the configured admin credentials for an ADMIN access token."""
    return auth_service.login_admin(payload.username, payload.password)


@router.get("/me", response_model=MeResponse)
async def read_me(claims: ClaimsDep, db: SessionDep, settings: SettingsDep) -> MeResponse:
    """Describe the identity behind the presented token."""
    if claims.role is Role.ADMIN:
        return MeResponse(id=claims.sub, username=settings.admin_username, type=Role.ADMIN)

    user = SqlUserRepository(db).get_by_id(claims.sub)
    if user is None:
        raise UnauthorizedError("Unauthorized: user not found")
    return MeResponse(id=user.id, username=user.username, type=Role.USER)
