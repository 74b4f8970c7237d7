"""Service layer for the Ballot Box application."""

from .admin_service import AdminService
from .auth_service import AuthService, CredentialService
from .vote_service import VotingService

__all__ = ["AdminService", "AuthService", "CredentialService", "VotingService"]
