"""Supabase auth lookups for bearer tokens."""

import logging
from dataclasses import dataclass
from uuid import UUID

import httpx
from supabase import AuthError, Client

from pet_tracker.domain.models import AuthenticatedUser
from pet_tracker.services.auth import AuthGateway

_logger = logging.getLogger(__name__)


@dataclass
class SupabaseAuthGateway(AuthGateway):
    """Resolves access tokens through the Supabase auth API."""

    client: Client

    def get_user(self, access_token: str) -> AuthenticatedUser | None:
        """Return the user behind a token, or None when it is rejected."""
        try:
            response = self.client.auth.get_user(access_token)
        except (AuthError, httpx.HTTPError) as exc:
            _logger.warning("Token lookup failed: %s", exc)
            return None
        if response is None or response.user is None:
            return None
        return AuthenticatedUser(
            id=UUID(str(response.user.id)),
            email=response.user.email,
        )
