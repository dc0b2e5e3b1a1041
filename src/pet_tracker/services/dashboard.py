"""Dashboard summary service."""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from uuid import UUID
from zoneinfo import ZoneInfo

from pet_tracker.domain.analytics import Dashboard, DashboardStats
from pet_tracker.domain.feeding import WeightEntry
from pet_tracker.services.feeding import FeedingService
from pet_tracker.services.pets import PetService
from pet_tracker.services.weights import WeightService

RECENT_LIMIT = 5


@dataclass
class DashboardService:
    """Service for the overview screen."""

    pet_service: PetService
    feeding_service: FeedingService
    weight_service: WeightService

    def get_dashboard(
        self,
        user_id: UUID,
        timezone_name: str = "UTC",
        now: datetime | None = None,
    ) -> Dashboard:
        """Return today's totals and the latest feedings and weighings."""
        tz = ZoneInfo(timezone_name)
        local_now = (now or datetime.now(tz=UTC)).astimezone(tz)
        start = local_now.replace(hour=0, minute=0, second=0, microsecond=0)
        end = start + timedelta(days=1)

        pets = self.pet_service.list_pets(user_id)
        today = self.feeding_service.list_feedings(
            user_id, start=start.astimezone(UTC), end=end.astimezone(UTC)
        )
        recent_feedings = self.feeding_service.list_recent(user_id, RECENT_LIMIT)
        recent_weights = self.weight_service.list_recent(user_id, RECENT_LIMIT)

        stats = DashboardStats(
            total_pets=len(pets),
            today_feedings=len(today),
            today_calories=sum(feeding.calories_consumed or 0.0 for feeding in today),
            recent_weight_trend=weight_trend(recent_weights),
        )
        return Dashboard(
            stats=stats,
            recent_feedings=recent_feedings,
            recent_weights=recent_weights,
        )


def weight_trend(weights: list[WeightEntry]) -> str:
    """Return the trend indicator; no slope is computed yet."""
    if not weights:
        return "no-data"
    return "stable"
