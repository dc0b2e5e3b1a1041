"""Services for managing the food catalog."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from pet_tracker.domain.foods import Food
from pet_tracker.services.errors import NotFoundError

_logger = logging.getLogger(__name__)


class FoodRepository(Protocol):
    """Persistence interface for the food catalog."""

    def list_foods(
        self, user_id: UUID, order_by: str = "created_at", desc: bool = True
    ) -> list[Food]:
        """Return the user's foods in the given order."""

    def get_food(self, user_id: UUID, food_id: UUID) -> Food | None:
        """Return a food by id, if the user owns it."""

    def create_food(self, user_id: UUID, payload: dict[str, object]) -> Food:
        """Create a food and return it."""

    def update_food(
        self, user_id: UUID, food_id: UUID, payload: dict[str, object]
    ) -> Food | None:
        """Update a food and return it, or None when nothing matched."""

    def delete_food(self, user_id: UUID, food_id: UUID) -> bool:
        """Delete a food; feeding rows referencing it cascade."""


@dataclass
class FoodService:
    """Application service for catalog operations."""

    repository: FoodRepository

    def list_foods(self, user_id: UUID, by_name: bool = False) -> list[Food]:
        """Return foods newest first, or alphabetically for pickers."""
        if by_name:
            return self.repository.list_foods(user_id, order_by="name", desc=False)
        return self.repository.list_foods(user_id)

    def get_food(self, user_id: UUID, food_id: UUID) -> Food:
        """Return a food or raise NotFoundError."""
        food = self.repository.get_food(user_id, food_id)
        if food is None:
            raise NotFoundError("Food", food_id)
        return food

    def create_food(self, user_id: UUID, payload: dict[str, object]) -> Food:
        """Create a catalog entry."""
        food = self.repository.create_food(user_id, payload)
        _logger.info("Created food %s for user %s", food.id, user_id)
        return food

    def update_food(
        self, user_id: UUID, food_id: UUID, payload: dict[str, object]
    ) -> Food:
        """Update a catalog entry or raise NotFoundError."""
        food = self.repository.update_food(user_id, food_id, payload)
        if food is None:
            raise NotFoundError("Food", food_id)
        return food

    def delete_food(self, user_id: UUID, food_id: UUID) -> None:
        """Delete a catalog entry and its feeding history."""
        if not self.repository.delete_food(user_id, food_id):
            raise NotFoundError("Food", food_id)
        _logger.info("Deleted food %s for user %s", food_id, user_id)
