"""Request dependencies shared by the API routers."""

from __future__ import annotations

from datetime import UTC, date, datetime
from typing import TYPE_CHECKING
from zoneinfo import ZoneInfo

from fastapi import Header, HTTPException, Query, Request, status

from pet_tracker.config import parse_locale
from pet_tracker.domain.models import AuthenticatedUser  # noqa: TC001
from pet_tracker.services.locale import parse_amount

if TYPE_CHECKING:
    from pet_tracker.containers import AppContainer

_BEARER_PREFIX = "bearer "


def get_container(request: Request) -> AppContainer:
    """Return the application container."""
    return request.app.state.container


async def current_user(
    request: Request,
    authorization: str | None = Header(default=None),
) -> AuthenticatedUser:
    """Resolve the request owner or reject the request."""
    container = get_container(request)
    token = None
    if authorization and authorization.lower().startswith(_BEARER_PREFIX):
        token = authorization[len(_BEARER_PREFIX) :].strip() or None
    user = container.auth_service.authenticate(token)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


async def request_locale(
    request: Request,
    accept_language: str | None = Header(default=None),
) -> str:
    """Return the locale used to parse and format numbers."""
    default = get_container(request).settings.default_locale
    return parse_locale(accept_language, default=default)


def local_today(timezone_name: str, now: datetime | None = None) -> date:
    """Return the calendar date in the given zone."""
    return (now or datetime.now(tz=UTC)).astimezone(ZoneInfo(timezone_name)).date()


async def request_today(request: Request) -> date:
    """Return today's date in the configured timezone."""
    return local_today(get_container(request).settings.default_timezone)


async def require_confirmation(confirm: bool = Query(default=False)) -> None:
    """Reject destructive requests that were not explicitly confirmed."""
    if not confirm:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Deletion must be confirmed with confirm=true",
        )


def form_amount(
    raw: str | float | None, locale: str, field: str, *, required: bool = False
) -> float | None:
    """Parse a form number, turning bad input into a 422."""
    try:
        value = parse_amount(raw, locale)
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"{field}: {exc}",
        ) from exc
    if value is None and required:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"{field} is required",
        )
    return value


def localize(moment: datetime | None, timezone_name: str) -> datetime | None:
    """Attach the configured timezone to naive form timestamps."""
    if moment is None or moment.tzinfo is not None:
        return moment
    return moment.replace(tzinfo=ZoneInfo(timezone_name))
