"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from pet_tracker.adapters.supabase_auth_gateway import SupabaseAuthGateway
from pet_tracker.adapters.supabase_feeding_repository import (
    SupabaseFeedingRepository,
)
from pet_tracker.adapters.supabase_food_repository import SupabaseFoodRepository
from pet_tracker.adapters.supabase_pet_repository import SupabasePetRepository
from pet_tracker.adapters.supabase_weight_repository import SupabaseWeightRepository
from pet_tracker.config import Settings
from pet_tracker.services.analytics import AnalyticsService
from pet_tracker.services.auth import AuthService
from pet_tracker.services.consumption import consumption_strategy
from pet_tracker.services.dashboard import DashboardService
from pet_tracker.services.feeding import FeedingService
from pet_tracker.services.foods import FoodService
from pet_tracker.services.pets import PetService
from pet_tracker.services.weights import WeightService

PRODUCTION = "production"


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    auth_service: AuthService
    pet_service: PetService
    food_service: FoodService
    feeding_service: FeedingService
    weight_service: WeightService
    dashboard_service: DashboardService
    analytics_service: AnalyticsService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    pet_repository = SupabasePetRepository(supabase_client)
    food_repository = SupabaseFoodRepository(supabase_client)
    feeding_repository = SupabaseFeedingRepository(supabase_client)
    weight_repository = SupabaseWeightRepository(supabase_client)

    mock_user_id = resolved_settings.mock_user_id
    if resolved_settings.environment == PRODUCTION:
        mock_user_id = None
    auth_service = AuthService(
        gateway=SupabaseAuthGateway(supabase_client),
        mock_user_id=mock_user_id,
    )
    feeding_service = FeedingService(
        repository=feeding_repository,
        pet_repository=pet_repository,
        food_repository=food_repository,
        strategy=consumption_strategy(resolved_settings.consumption_policy),
    )

    pet_service = PetService(pet_repository)
    weight_service = WeightService(weight_repository, pet_repository)

    return AppContainer(
        settings=resolved_settings,
        auth_service=auth_service,
        pet_service=pet_service,
        food_service=FoodService(food_repository),
        feeding_service=feeding_service,
        weight_service=weight_service,
        dashboard_service=DashboardService(
            pet_service=pet_service,
            feeding_service=feeding_service,
            weight_service=weight_service,
        ),
        analytics_service=AnalyticsService(
            feeding_repository=feeding_repository,
            weight_repository=weight_repository,
        ),
    )
