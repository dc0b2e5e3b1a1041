"""Domain models for the pet tracker."""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class AuthenticatedUser:
    """The identity that owns every record a request touches."""

    id: UUID
    email: str | None = None
