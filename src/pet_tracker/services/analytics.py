"""Aggregation of feeding and weight logs for charts."""

from collections import defaultdict
from dataclasses import dataclass
from datetime import UTC, date, datetime, timedelta
from enum import StrEnum
from uuid import UUID
from zoneinfo import ZoneInfo

from pet_tracker.domain.analytics import (
    AnalyticsReport,
    DailyCalories,
    FoodShare,
    WeightPoint,
    WeightSeries,
)
from pet_tracker.domain.feeding import FeedingEntry, WeightEntry
from pet_tracker.services.feeding import FeedingRepository
from pet_tracker.services.weights import WeightRepository

UNKNOWN_FOOD = "Unknown"


class TimeRange(StrEnum):
    """Look-back windows offered by the analytics view."""

    WEEK = "week"
    MONTH = "month"
    THREE_MONTHS = "3months"

    @property
    def days(self) -> int:
        """Number of days covered by the window."""
        return _RANGE_DAYS[self]


_RANGE_DAYS = {
    TimeRange.WEEK: 7,
    TimeRange.MONTH: 30,
    TimeRange.THREE_MONTHS: 90,
}


@dataclass
class AnalyticsService:
    """Service for chart series over a time window."""

    feeding_repository: FeedingRepository
    weight_repository: WeightRepository

    def build_report(  # noqa: PLR0913
        self,
        user_id: UUID,
        time_range: TimeRange = TimeRange.MONTH,
        pet_id: UUID | None = None,
        timezone_name: str = "UTC",
        now: datetime | None = None,
    ) -> AnalyticsReport:
        """Return calorie, food and weight series for the window."""
        tz = ZoneInfo(timezone_name)
        end = now or datetime.now(tz=UTC)
        start = end - timedelta(days=time_range.days)
        feedings = self.feeding_repository.list_feedings(
            user_id, pet_id=pet_id, start=start, end=end, desc=False
        )
        weights = self.weight_repository.list_weights(
            user_id, pet_id=pet_id, start=start, end=end, desc=False
        )
        return AnalyticsReport(
            start=start,
            end=end,
            daily_calories=daily_calories(feedings, tz),
            food_distribution=food_distribution(feedings),
            weights=weight_series(weights, tz),
        )


def local_day(moment: datetime, tz: ZoneInfo) -> date:
    """Return the calendar date of a timestamp in the given timezone."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=UTC)
    return moment.astimezone(tz).date()


def daily_calories(feedings: list[FeedingEntry], tz: ZoneInfo) -> list[DailyCalories]:
    """Sum calories per local calendar day, oldest day first."""
    totals: dict[date, float] = defaultdict(float)
    for feeding in feedings:
        totals[local_day(feeding.fed_at, tz)] += feeding.calories_consumed or 0.0
    return [DailyCalories(day=day, calories=totals[day]) for day in sorted(totals)]


def food_distribution(feedings: list[FeedingEntry]) -> list[FoodShare]:
    """Sum consumed amounts by food name, largest first."""
    totals: dict[str, float] = defaultdict(float)
    for feeding in feedings:
        name = feeding.food.name if feeding.food else UNKNOWN_FOOD
        totals[name] += feeding.actual_consumed or 0.0
    shares = [FoodShare(name=name, amount=amount) for name, amount in totals.items()]
    return sorted(shares, key=lambda share: share.amount, reverse=True)


def weight_series(weights: list[WeightEntry], tz: ZoneInfo) -> list[WeightSeries]:
    """Group weighings per pet in chronological order."""
    points: dict[UUID, list[WeightPoint]] = {}
    names: dict[UUID, str | None] = {}
    for entry in sorted(weights, key=lambda item: _as_aware(item.weighed_at)):
        points.setdefault(entry.pet_id, []).append(
            WeightPoint(
                day=local_day(entry.weighed_at, tz),
                weighed_at=entry.weighed_at,
                weight=entry.weight,
            )
        )
        if entry.pet is not None:
            names[entry.pet_id] = entry.pet.name
        else:
            names.setdefault(entry.pet_id, None)
    return [
        WeightSeries(pet_id=pet_id, pet_name=names[pet_id], points=series)
        for pet_id, series in points.items()
    ]


def _as_aware(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=UTC)
    return moment
