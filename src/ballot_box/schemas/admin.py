"""Admin-facing Pydantic schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from .common import PaginationOut


class UserCreate(BaseModel):
    """Request to provision a new voter account."""

    username: str = Field(..., min_length=3, description="Unique login name")


class UserOut(BaseModel):
    """User record as exposed to administrators; the password hash is omitted."""

    id: str
    username: str
    initial_password: str = Field(..., description="Generated password to hand to the voter")
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class UserListResponse(BaseModel):
    users: list[UserOut] = Field(..., alias="list")
    pagination: PaginationOut
