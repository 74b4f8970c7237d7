"""Shared Pydantic schemas."""

from pydantic import BaseModel, ConfigDict, Field


class PaginationOut(BaseModel):
    """Paging metadata attached to list responses."""

    page: int
    size: int
    total: int
    last_page: int

    model_config = ConfigDict(from_attributes=True)


class ErrorDetailOut(BaseModel):
    field: str
    error: str


class ErrorResponse(BaseModel):
    """Body returned for every failed request."""

    code: int = Field(..., description="Stable application error code")
    message: str
    details: list[ErrorDetailOut] = Field(default_factory=list)
