"""Vote-related Pydantic schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class VoteCreate(BaseModel):
    """Schema for casting or changing a vote."""

    name: str = Field(..., min_length=1, description="Option being voted for")


class VoteOut(BaseModel):
    """A user's current ballot."""

    id: str
    user_id: str
    option_name: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class CurrentVoteResponse(BaseModel):
    current_vote: VoteOut | None


class VoteCastResponse(BaseModel):
    id: str


class OptionListResponse(BaseModel):
    options: list[str] = Field(..., alias="list")


class VoteSummaryEntry(BaseModel):
    """Tally for a single option."""

    option_name: str
    count: int
    percentage: float


class VoteSummary(BaseModel):
    """Aggregate of all current votes, most popular option first."""

    winner: str | None = None
    total_count: int = 0
    entries: list[VoteSummaryEntry] = Field(default_factory=list)
