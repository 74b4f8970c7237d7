# src/ballot_box/models/__init__.py
"""SQLAlchemy models for the Ballot Box application."""

from .user import User
from .vote import Vote

__all__ = ["User", "Vote"]
