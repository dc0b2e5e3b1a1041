"""Pet management service."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from pet_tracker.domain.pets import Pet
from pet_tracker.services.errors import NotFoundError

_logger = logging.getLogger(__name__)


class PetRepository(Protocol):
    """Persistence interface for pets."""

    def list_pets(
        self, user_id: UUID, order_by: str = "created_at", desc: bool = True
    ) -> list[Pet]:
        """Return the user's pets in the given order."""

    def get_pet(self, user_id: UUID, pet_id: UUID) -> Pet | None:
        """Return a pet by id, if the user owns it."""

    def create_pet(self, user_id: UUID, payload: dict[str, object]) -> Pet:
        """Create a pet and return it."""

    def update_pet(
        self, user_id: UUID, pet_id: UUID, payload: dict[str, object]
    ) -> Pet | None:
        """Update a pet and return it, or None when nothing matched."""

    def delete_pet(self, user_id: UUID, pet_id: UUID) -> bool:
        """Delete a pet; feeding and weight rows cascade in the database."""


@dataclass
class PetService:
    """Application service for pet lifecycle actions."""

    repository: PetRepository

    def list_pets(self, user_id: UUID, by_name: bool = False) -> list[Pet]:
        """Return pets newest first, or alphabetically for pickers."""
        if by_name:
            return self.repository.list_pets(user_id, order_by="name", desc=False)
        return self.repository.list_pets(user_id)

    def get_pet(self, user_id: UUID, pet_id: UUID) -> Pet:
        """Return a pet or raise NotFoundError."""
        pet = self.repository.get_pet(user_id, pet_id)
        if pet is None:
            raise NotFoundError("Pet", pet_id)
        return pet

    def create_pet(self, user_id: UUID, payload: dict[str, object]) -> Pet:
        """Create a pet."""
        pet = self.repository.create_pet(user_id, payload)
        _logger.info("Created pet %s for user %s", pet.id, user_id)
        return pet

    def update_pet(
        self, user_id: UUID, pet_id: UUID, payload: dict[str, object]
    ) -> Pet:
        """Update a pet or raise NotFoundError."""
        pet = self.repository.update_pet(user_id, pet_id, payload)
        if pet is None:
            raise NotFoundError("Pet", pet_id)
        return pet

    def delete_pet(self, user_id: UUID, pet_id: UUID) -> None:
        """Delete a pet together with its feeding and weight history."""
        if not self.repository.delete_pet(user_id, pet_id):
            raise NotFoundError("Pet", pet_id)
        _logger.info("Deleted pet %s for user %s", pet_id, user_id)
