"""Weight log service."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID

from pet_tracker.domain.feeding import WeightEntry
from pet_tracker.services.errors import NotFoundError
from pet_tracker.services.pets import PetRepository

_logger = logging.getLogger(__name__)

WEIGHT_PRECISION = 2


class WeightRepository(Protocol):
    """Persistence interface for weight entries."""

    def list_weights(  # noqa: PLR0913
        self,
        user_id: UUID,
        pet_id: UUID | None = None,
        start: datetime | None = None,
        end: datetime | None = None,
        desc: bool = True,
        limit: int | None = None,
    ) -> list[WeightEntry]:
        """Return weighings joined with pet, ordered by weighed_at."""

    def get_weight(self, user_id: UUID, weight_id: UUID) -> WeightEntry | None:
        """Return a weighing by id, if the user owns it."""

    def create_weight(self, user_id: UUID, payload: dict[str, object]) -> WeightEntry:
        """Create a weighing and return it."""

    def update_weight(
        self, user_id: UUID, weight_id: UUID, payload: dict[str, object]
    ) -> WeightEntry | None:
        """Update a weighing and return it, or None when nothing matched."""

    def delete_weight(self, user_id: UUID, weight_id: UUID) -> bool:
        """Delete a weighing."""


@dataclass
class WeightService:
    """Application service for weight measurements."""

    repository: WeightRepository
    pet_repository: PetRepository

    def list_weights(
        self, user_id: UUID, pet_id: UUID | None = None
    ) -> list[WeightEntry]:
        """Return weighings newest first."""
        return self.repository.list_weights(user_id, pet_id=pet_id)

    def list_recent(self, user_id: UUID, limit: int = 5) -> list[WeightEntry]:
        """Return the latest weighings."""
        return self.repository.list_weights(user_id, limit=limit)

    def get_weight(self, user_id: UUID, weight_id: UUID) -> WeightEntry:
        """Return a weighing or raise NotFoundError."""
        entry = self.repository.get_weight(user_id, weight_id)
        if entry is None:
            raise NotFoundError("Weight", weight_id)
        return entry

    def record_weight(  # noqa: PLR0913
        self,
        user_id: UUID,
        pet_id: UUID,
        weight: float,
        weighed_at: datetime | None = None,
        notes: str | None = None,
    ) -> WeightEntry:
        """Store a new weighing for an owned pet."""
        self._ensure_pet(user_id, pet_id)
        entry = self.repository.create_weight(
            user_id, _payload(pet_id, weight, weighed_at, notes)
        )
        _logger.info("Recorded weight %s for pet %s", entry.id, pet_id)
        return entry

    def update_weight(  # noqa: PLR0913
        self,
        user_id: UUID,
        weight_id: UUID,
        pet_id: UUID,
        weight: float,
        weighed_at: datetime | None = None,
        notes: str | None = None,
    ) -> WeightEntry:
        """Update a weighing or raise NotFoundError."""
        existing = self.get_weight(user_id, weight_id)
        self._ensure_pet(user_id, pet_id)
        entry = self.repository.update_weight(
            user_id,
            weight_id,
            _payload(pet_id, weight, weighed_at or existing.weighed_at, notes),
        )
        if entry is None:
            raise NotFoundError("Weight", weight_id)
        return entry

    def delete_weight(self, user_id: UUID, weight_id: UUID) -> None:
        """Delete a weighing."""
        if not self.repository.delete_weight(user_id, weight_id):
            raise NotFoundError("Weight", weight_id)
        _logger.info("Deleted weight %s for user %s", weight_id, user_id)

    def _ensure_pet(self, user_id: UUID, pet_id: UUID) -> None:
        if self.pet_repository.get_pet(user_id, pet_id) is None:
            raise NotFoundError("Pet", pet_id)


def _payload(
    pet_id: UUID, weight: float, weighed_at: datetime | None, notes: str | None
) -> dict[str, object]:
    return {
        "pet_id": str(pet_id),
        "weight": round(weight, WEIGHT_PRECISION),
        "weighed_at": (weighed_at or datetime.now(tz=UTC)).isoformat(),
        "notes": notes or None,
    }
