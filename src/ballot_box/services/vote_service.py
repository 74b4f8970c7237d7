"""Voting service: a voter's view of the election."""
from __future__ import annotations

from ballot_box.models.vote import Vote
from ballot_box.repositories.vote_repo import VoteRepository


class VotingService:
    """Casting and reading ballots on behalf of the current user."""

    def __init__(self, votes: VoteRepository) -> None:
        self.votes = votes

    def get_current_vote(self, user_id: str) -> Vote | None:
        return self.votes.get_by_user(user_id)

    def get_options(self) -> list[str]:
        return self.votes.distinct_options()

    def cast_vote(self, user_id: str, option_name: str) -> str:
        """Record ``option_name`` as the user's vote, replacing any earlier one."""
        return self.votes.upsert(user_id, option_name)
