"""Data access layer for users and votes."""

from .base import Page, Pagination
from .user_repo import SqlUserRepository, UserRepository
from .vote_repo import SqlVoteRepository, VoteRepository

__all__ = [
    "Page",
    "Pagination",
    "SqlUserRepository",
    "SqlVoteRepository",
    "UserRepository",
    "VoteRepository",
]
