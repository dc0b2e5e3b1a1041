"""Dashboard and analytics endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request

from pet_tracker.api.deps import current_user, get_container, request_locale
from pet_tracker.api.serializers import serialize_dashboard, serialize_report
from pet_tracker.domain.models import AuthenticatedUser
from pet_tracker.services.analytics import TimeRange

router = APIRouter(tags=["insights"])


@router.get("/dashboard")
async def dashboard(
    request: Request,
    user: AuthenticatedUser = Depends(current_user),
    locale: str = Depends(request_locale),
) -> dict[str, object]:
    """Return today's totals with the latest feedings and weighings."""
    container = get_container(request)
    summary = container.dashboard_service.get_dashboard(
        user.id, container.settings.default_timezone
    )
    return serialize_dashboard(summary, locale)


@router.get("/analytics")
async def analytics(
    request: Request,
    time_range: TimeRange = Query(default=TimeRange.MONTH, alias="range"),
    pet_id: UUID | None = None,
    user: AuthenticatedUser = Depends(current_user),
) -> dict[str, object]:
    """Return chart series for the chosen window and pet."""
    container = get_container(request)
    report = container.analytics_service.build_report(
        user.id,
        time_range=time_range,
        pet_id=pet_id,
        timezone_name=container.settings.default_timezone,
    )
    return serialize_report(report)
