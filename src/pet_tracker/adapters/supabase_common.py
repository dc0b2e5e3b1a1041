"""Shared helpers for Supabase repositories."""

from collections.abc import Callable
from datetime import UTC, date, datetime
from typing import Any

import httpx
from postgrest.exceptions import APIError

from pet_tracker.services.errors import DataAccessError


def execute(build: Callable[[], Any], action: str) -> list[dict[str, Any]]:
    """Run a query builder and return its rows, wrapping backend failures."""
    try:
        response = build().execute()
    except (APIError, httpx.HTTPError) as exc:
        raise DataAccessError(f"Failed to {action}") from exc
    return response.data or []


def now_iso() -> str:
    """Current UTC time for updated_at stamps."""
    return datetime.now(tz=UTC).isoformat()


def parse_datetime(raw: object) -> datetime | None:
    """Parse an ISO timestamp column."""
    if isinstance(raw, str) and raw:
        return datetime.fromisoformat(raw)
    return None


def parse_date(raw: object) -> date | None:
    """Parse an ISO date column."""
    if isinstance(raw, str) and raw:
        return date.fromisoformat(raw[:10])
    return None


def optional_float(raw: object) -> float | None:
    """Convert a nullable numeric column."""
    if raw is None:
        return None
    return float(raw)
