"""Abstract base class for bearer-token identity verification."""

from __future__ import annotations

from abc import ABC, abstractmethod

from src.models.user import AuthenticatedUser


class IIdentityProvider(ABC):
    """Contract for resolving an access token to an authenticated user."""

    @abstractmethod
    async def verify_token(self, token: str) -> AuthenticatedUser:
        """Return the user that *token* was issued to.

        Raises
        ------
        src.utils.errors.UnauthorizedError
            If the token is missing, malformed, expired, or revoked.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a human-readable identifier for this provider."""
