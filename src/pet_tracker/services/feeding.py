"""Feeding log service."""

import logging
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID

from pet_tracker.domain.feeding import FeedingDraft, FeedingEntry
from pet_tracker.domain.foods import Food
from pet_tracker.services.consumption import (
    ConsumptionStrategy,
    RefillAccountingStrategy,
    compute_calories,
)
from pet_tracker.services.errors import NotFoundError, SetupIncompleteError
from pet_tracker.services.foods import FoodRepository
from pet_tracker.services.pets import PetRepository

_logger = logging.getLogger(__name__)

AMOUNT_PRECISION = 2


class FeedingRepository(Protocol):
    """Persistence interface for feeding entries."""

    def list_feedings(  # noqa: PLR0913
        self,
        user_id: UUID,
        pet_id: UUID | None = None,
        start: datetime | None = None,
        end: datetime | None = None,
        desc: bool = True,
        limit: int | None = None,
    ) -> list[FeedingEntry]:
        """Return feedings joined with pet and food, ordered by fed_at."""

    def get_feeding(self, user_id: UUID, feeding_id: UUID) -> FeedingEntry | None:
        """Return a feeding by id, if the user owns it."""

    def get_previous_feeding(  # noqa: PLR0913
        self,
        user_id: UUID,
        pet_id: UUID,
        food_id: UUID,
        before: datetime,
        exclude_id: UUID | None = None,
    ) -> FeedingEntry | None:
        """Return the latest feeding of the same pet and food before a time."""

    def get_next_feeding(  # noqa: PLR0913
        self,
        user_id: UUID,
        pet_id: UUID,
        food_id: UUID,
        after: datetime,
        exclude_id: UUID | None = None,
    ) -> FeedingEntry | None:
        """Return the earliest feeding of the same pet and food after a time."""

    def create_feeding(
        self, user_id: UUID, payload: dict[str, object]
    ) -> FeedingEntry:
        """Create a feeding and return it."""

    def update_feeding(
        self, user_id: UUID, feeding_id: UUID, payload: dict[str, object]
    ) -> FeedingEntry | None:
        """Update a feeding and return it, or None when nothing matched."""

    def delete_feeding(self, user_id: UUID, feeding_id: UUID) -> bool:
        """Delete a feeding."""


@dataclass
class FeedingService:
    """Service that derives consumption and persists feedings."""

    repository: FeedingRepository
    pet_repository: PetRepository
    food_repository: FoodRepository
    strategy: ConsumptionStrategy = field(default_factory=RefillAccountingStrategy)

    def list_feedings(
        self,
        user_id: UUID,
        pet_id: UUID | None = None,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> list[FeedingEntry]:
        """Return feedings newest first, optionally within [start, end)."""
        return self.repository.list_feedings(
            user_id, pet_id=pet_id, start=start, end=end
        )

    def list_recent(self, user_id: UUID, limit: int = 5) -> list[FeedingEntry]:
        """Return the latest feedings."""
        return self.repository.list_feedings(user_id, limit=limit)

    def get_feeding(self, user_id: UUID, feeding_id: UUID) -> FeedingEntry:
        """Return a feeding or raise NotFoundError."""
        feeding = self.repository.get_feeding(user_id, feeding_id)
        if feeding is None:
            raise NotFoundError("Feeding", feeding_id)
        return feeding

    def log_feeding(self, user_id: UUID, draft: FeedingDraft) -> FeedingEntry:
        """Derive consumption for a new feeding and store it."""
        food = self._resolve_food(user_id, draft)
        payload = self._build_payload(user_id, draft, food, exclude_id=None)
        feeding = self.repository.create_feeding(user_id, payload)
        self._refresh_next(user_id, feeding)
        _logger.info(
            "Logged feeding %s for pet %s (consumed=%s, calories=%s)",
            feeding.id,
            draft.pet_id,
            payload["actual_consumed"],
            payload["calories_consumed"],
        )
        return feeding

    def update_feeding(
        self, user_id: UUID, feeding_id: UUID, draft: FeedingDraft
    ) -> FeedingEntry:
        """Recompute consumption for an edited feeding and store it."""
        existing = self.get_feeding(user_id, feeding_id)
        food = self._resolve_food(user_id, draft)
        if draft.fed_at is None:
            draft = replace(draft, fed_at=existing.fed_at)
        payload = self._build_payload(user_id, draft, food, exclude_id=feeding_id)
        feeding = self.repository.update_feeding(user_id, feeding_id, payload)
        if feeding is None:
            raise NotFoundError("Feeding", feeding_id)
        self._refresh_next(user_id, existing)
        self._refresh_next(user_id, feeding)
        return feeding

    def delete_feeding(self, user_id: UUID, feeding_id: UUID) -> None:
        """Delete a feeding."""
        existing = self.get_feeding(user_id, feeding_id)
        if not self.repository.delete_feeding(user_id, feeding_id):
            raise NotFoundError("Feeding", feeding_id)
        self._refresh_next(user_id, existing)
        _logger.info("Deleted feeding %s for user %s", feeding_id, user_id)

    def _resolve_food(self, user_id: UUID, draft: FeedingDraft) -> Food:
        pets = self.pet_repository.list_pets(user_id, order_by="name", desc=False)
        foods = self.food_repository.list_foods(user_id, order_by="name", desc=False)
        if not pets or not foods:
            raise SetupIncompleteError("Add a pet and a food before logging feedings")
        if not any(pet.id == draft.pet_id for pet in pets):
            raise NotFoundError("Pet", draft.pet_id)
        for food in foods:
            if food.id == draft.food_id:
                return food
        raise NotFoundError("Food", draft.food_id)

    def _refresh_next(self, user_id: UUID, anchor: FeedingEntry) -> None:
        """Recompute the feeding whose previous weighing was the anchor."""
        if not self.strategy.needs_previous:
            return
        following = self.repository.get_next_feeding(
            user_id,
            anchor.pet_id,
            anchor.food_id,
            after=anchor.fed_at,
            exclude_id=anchor.id,
        )
        if following is None:
            return
        food = following.food or self.food_repository.get_food(
            user_id, following.food_id
        )
        if food is None:
            return
        draft = FeedingDraft(
            pet_id=following.pet_id,
            food_id=following.food_id,
            amount_put_out=following.amount_put_out,
            amount_not_eaten=following.amount_not_eaten,
            amount_refilled=following.amount_refilled,
            fed_at=following.fed_at,
            notes=following.notes,
        )
        payload = self._build_payload(user_id, draft, food, exclude_id=following.id)
        self.repository.update_feeding(user_id, following.id, payload)
        _logger.info(
            "Recomputed feeding %s after change to %s (consumed=%s)",
            following.id,
            anchor.id,
            payload["actual_consumed"],
        )

    def _build_payload(
        self,
        user_id: UUID,
        draft: FeedingDraft,
        food: Food,
        exclude_id: UUID | None,
    ) -> dict[str, object]:
        fed_at = draft.fed_at or datetime.now(tz=UTC)
        previous_put_out = None
        if self.strategy.needs_previous:
            previous = self.repository.get_previous_feeding(
                user_id,
                draft.pet_id,
                draft.food_id,
                before=fed_at,
                exclude_id=exclude_id,
            )
            if previous is not None:
                previous_put_out = previous.amount_put_out

        consumed = self.strategy.consumed(
            draft.amount_put_out,
            amount_not_eaten=draft.amount_not_eaten,
            amount_refilled=draft.amount_refilled,
            previous_put_out=previous_put_out,
        )
        calories = compute_calories(consumed, food)
        return {
            "pet_id": str(draft.pet_id),
            "food_id": str(draft.food_id),
            "amount_put_out": round(draft.amount_put_out, AMOUNT_PRECISION),
            "amount_not_eaten": _optional_amount(draft.amount_not_eaten),
            "amount_refilled": _optional_amount(draft.amount_refilled),
            "actual_consumed": round(consumed, AMOUNT_PRECISION),
            "calories_consumed": (
                round(calories, AMOUNT_PRECISION) if calories is not None else None
            ),
            "fed_at": fed_at.isoformat(),
            "notes": draft.notes or None,
        }


def _optional_amount(value: float | None) -> float | None:
    if not value:
        return None
    return round(value, AMOUNT_PRECISION)
