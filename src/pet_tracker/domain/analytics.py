"""Domain models for dashboards and analytics."""

from dataclasses import dataclass
from datetime import date, datetime
from uuid import UUID

from pet_tracker.domain.feeding import FeedingEntry, WeightEntry


@dataclass(frozen=True)
class DailyCalories:
    """Calories consumed on one local calendar day."""

    day: date
    calories: float


@dataclass(frozen=True)
class FoodShare:
    """Total consumed amount for one food."""

    name: str
    amount: float


@dataclass(frozen=True)
class WeightPoint:
    """A single weighing on a pet's trend line."""

    day: date
    weighed_at: datetime
    weight: float


@dataclass(frozen=True)
class WeightSeries:
    """Chronological weighings for one pet."""

    pet_id: UUID
    pet_name: str | None
    points: list[WeightPoint]


@dataclass(frozen=True)
class AnalyticsReport:
    """Chart-ready series for a time window."""

    start: datetime
    end: datetime
    daily_calories: list[DailyCalories]
    food_distribution: list[FoodShare]
    weights: list[WeightSeries]


@dataclass(frozen=True)
class DashboardStats:
    """Headline numbers for the dashboard."""

    total_pets: int
    today_feedings: int
    today_calories: float
    recent_weight_trend: str


@dataclass(frozen=True)
class Dashboard:
    """Dashboard stats with the latest activity."""

    stats: DashboardStats
    recent_feedings: list[FeedingEntry]
    recent_weights: list[WeightEntry]
