"""Domain models for feeding and weight logs."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from pet_tracker.domain.foods import Food
from pet_tracker.domain.pets import Pet


@dataclass(frozen=True)
class FeedingEntry:
    """A single feeding event with derived consumption."""

    id: UUID
    user_id: UUID
    pet_id: UUID
    food_id: UUID
    amount_put_out: float
    amount_not_eaten: float | None
    amount_refilled: float | None
    actual_consumed: float | None
    calories_consumed: float | None
    fed_at: datetime
    notes: str | None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    pet: Pet | None = None
    food: Food | None = None


@dataclass(frozen=True)
class FeedingDraft:
    """User-entered feeding fields before consumption is derived."""

    pet_id: UUID
    food_id: UUID
    amount_put_out: float
    amount_not_eaten: float | None = None
    amount_refilled: float | None = None
    fed_at: datetime | None = None
    notes: str | None = None


@dataclass(frozen=True)
class WeightEntry:
    """A weight measurement for a pet."""

    id: UUID
    user_id: UUID
    pet_id: UUID
    weight: float
    weighed_at: datetime
    notes: str | None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    pet: Pet | None = None
