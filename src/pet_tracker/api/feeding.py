"""Feeding log endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, Request, status

from pet_tracker.api.deps import (
    current_user,
    form_amount,
    get_container,
    localize,
    request_locale,
    require_confirmation,
)
from pet_tracker.api.forms import FeedingForm
from pet_tracker.api.serializers import serialize_feeding
from pet_tracker.domain.feeding import FeedingDraft
from pet_tracker.domain.models import AuthenticatedUser

router = APIRouter(prefix="/feedings", tags=["feedings"])


def _draft(form: FeedingForm, locale: str, timezone_name: str) -> FeedingDraft:
    return FeedingDraft(
        pet_id=form.pet_id,
        food_id=form.food_id,
        amount_put_out=form_amount(
            form.amount_put_out, locale, "amount_put_out", required=True
        ),
        amount_not_eaten=form_amount(form.amount_not_eaten, locale, "amount_not_eaten"),
        amount_refilled=form_amount(form.amount_refilled, locale, "amount_refilled"),
        fed_at=localize(form.fed_at, timezone_name),
        notes=form.notes or None,
    )


@router.get("")
async def list_feedings(
    request: Request,
    pet_id: UUID | None = None,
    user: AuthenticatedUser = Depends(current_user),
    locale: str = Depends(request_locale),
) -> dict[str, object]:
    """Return feedings newest first, optionally for one pet."""
    feedings = get_container(request).feeding_service.list_feedings(
        user.id, pet_id=pet_id
    )
    return {"feedings": [serialize_feeding(feeding, locale) for feeding in feedings]}


@router.get("/{feeding_id}")
async def get_feeding(
    feeding_id: UUID,
    request: Request,
    user: AuthenticatedUser = Depends(current_user),
    locale: str = Depends(request_locale),
) -> dict[str, object]:
    """Return one feeding."""
    feeding = get_container(request).feeding_service.get_feeding(user.id, feeding_id)
    return serialize_feeding(feeding, locale)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_feeding(
    form: FeedingForm,
    request: Request,
    user: AuthenticatedUser = Depends(current_user),
    locale: str = Depends(request_locale),
) -> dict[str, object]:
    """Log a feeding; consumption and calories are derived server-side."""
    container = get_container(request)
    draft = _draft(form, locale, container.settings.default_timezone)
    feeding = container.feeding_service.log_feeding(user.id, draft)
    return serialize_feeding(feeding, locale)


@router.put("/{feeding_id}")
async def update_feeding(
    feeding_id: UUID,
    form: FeedingForm,
    request: Request,
    user: AuthenticatedUser = Depends(current_user),
    locale: str = Depends(request_locale),
) -> dict[str, object]:
    """Edit a feeding and recompute its derived fields."""
    container = get_container(request)
    draft = _draft(form, locale, container.settings.default_timezone)
    feeding = container.feeding_service.update_feeding(user.id, feeding_id, draft)
    return serialize_feeding(feeding, locale)


@router.delete(
    "/{feeding_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_confirmation)],
)
async def delete_feeding(
    feeding_id: UUID,
    request: Request,
    user: AuthenticatedUser = Depends(current_user),
) -> None:
    """Delete a feeding."""
    get_container(request).feeding_service.delete_feeding(user.id, feeding_id)
