# src/ballot_box/api/v1/endpoints/votes.py
"""Vote-related endpoints for the Ballot Box API."""

from fastapi import APIRouter, status

from ballot_box.schemas.vote import (
    CurrentVoteResponse,
    OptionListResponse,
    VoteCastResponse,
    VoteCreate,
    VoteOut,
)

from ..dependencies import CurrentUserDep, VotingServiceDep

router = APIRouter(prefix="/vote", tags=["votes"])


@router.get("/current", response_model=CurrentVoteResponse)
async def get_current_vote(
    current_user: CurrentUserDep,
    voting: VotingServiceDep,
) -> CurrentVoteResponse:
    """Return the caller's vote, or null if they have not voted."""
    vote = voting.get_current_vote(current_user.id)
    return CurrentVoteResponse(
        current_vote=VoteOut.model_validate(vote) if vote is not None else None
    )


@router.get("/options", response_model=OptionListResponse)
async def get_options(current_user: CurrentUserDep, voting: VotingServiceDep) -> OptionListResponse:
    """List every option that has received at least one vote."""
    return OptionListResponse(list=voting.get_options())


@router.post("/", status_code=status.HTTP_201_CREATED, response_model=VoteCastResponse)
async def cast_vote(
    vote_data: VoteCreate,
    current_user: CurrentUserDep,
    voting: VotingServiceDep,
) -> VoteCastResponse:
    """Cast or change the caller's vote."""
    vote_id = voting.cast_vote(current_user.id, vote_data.name)
    return VoteCastResponse(id=vote_id)
