# src/ballot_box/api/v1/endpoints/admin.py
"""Administrator endpoints: voter management and results."""

from __future__ import annotations

from fastapi import APIRouter, Query, status

from ballot_box.schemas.admin import UserCreate, UserListResponse, UserOut
from ballot_box.schemas.common import PaginationOut
from ballot_box.schemas.vote import VoteSummary

from ..dependencies import AdminClaimsDep, AdminServiceDep

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/users", response_model=UserListResponse)
async def list_users(
    _claims: AdminClaimsDep,
    admin: AdminServiceDep,
    page: int = Query(1, ge=1),
    size: int = Query(10, ge=1),
) -> UserListResponse:
    """List voters, oldest first."""
    result = admin.list_users(page, size)
    return UserListResponse(
        list=[UserOut.model_validate(user) for user in result.items],
        pagination=PaginationOut.model_validate(result.pagination),
    )


@router.post("/users", status_code=status.HTTP_201_CREATED, response_model=UserOut)
async def create_user(
    payload: UserCreate,
    _claims: AdminClaimsDep,
    admin: AdminServiceDep,
) -> UserOut:
    """Provision a voter and return their generated password."""
    return UserOut.model_validate(admin.create_user(payload.username))


@router.get("/summary", response_model=VoteSummary)
async def get_summary(_claims: AdminClaimsDep, admin: AdminServiceDep) -> VoteSummary:
    """Return the current tally."""
    return admin.get_summary()
