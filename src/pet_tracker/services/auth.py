"""Resolution of the authenticated owner for a request."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from pet_tracker.domain.models import AuthenticatedUser

_logger = logging.getLogger(__name__)


class AuthGateway(Protocol):
    """Looks up the identity behind an access token."""

    def get_user(self, access_token: str) -> AuthenticatedUser | None:
        """Return the user for a token, or None when it is not valid."""


@dataclass
class AuthService:
    """Service holding the authenticated-session rules."""

    gateway: AuthGateway
    mock_user_id: UUID | None = None

    def authenticate(self, access_token: str | None) -> AuthenticatedUser | None:
        """Return the request owner, falling back to the mock user when set."""
        if access_token:
            user = self.gateway.get_user(access_token)
            if user is None:
                _logger.info("Rejected access token")
            return user
        if self.mock_user_id is not None:
            return AuthenticatedUser(id=self.mock_user_id, email=None)
        return None
