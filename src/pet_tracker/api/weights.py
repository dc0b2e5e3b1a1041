"""Weight log endpoints."""

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
from pet_tracker.api.forms import WeightForm
from pet_tracker.api.serializers import serialize_weight
from pet_tracker.domain.models import AuthenticatedUser

router = APIRouter(prefix="/weights", tags=["weights"])


@router.get("")
async def list_weights(
    request: Request,
    pet_id: UUID | None = None,
    user: AuthenticatedUser = Depends(current_user),
    locale: str = Depends(request_locale),
) -> dict[str, object]:
    """Return weighings newest first, optionally for one pet."""
    entries = get_container(request).weight_service.list_weights(
        user.id, pet_id=pet_id
    )
    return {"weights": [serialize_weight(entry, locale) for entry in entries]}


@router.get("/{weight_id}")
async def get_weight(
    weight_id: UUID,
    request: Request,
    user: AuthenticatedUser = Depends(current_user),
    locale: str = Depends(request_locale),
) -> dict[str, object]:
    """Return one weighing."""
    entry = get_container(request).weight_service.get_weight(user.id, weight_id)
    return serialize_weight(entry, locale)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_weight(
    form: WeightForm,
    request: Request,
    user: AuthenticatedUser = Depends(current_user),
    locale: str = Depends(request_locale),
) -> dict[str, object]:
    """Record a weighing."""
    container = get_container(request)
    entry = container.weight_service.record_weight(
        user.id,
        form.pet_id,
        form_amount(form.weight, locale, "weight", required=True),
        weighed_at=localize(form.weighed_at, container.settings.default_timezone),
        notes=form.notes or None,
    )
    return serialize_weight(entry, locale)


@router.put("/{weight_id}")
async def update_weight(
    weight_id: UUID,
    form: WeightForm,
    request: Request,
    user: AuthenticatedUser = Depends(current_user),
    locale: str = Depends(request_locale),
) -> dict[str, object]:
    """Edit a weighing."""
    container = get_container(request)
    entry = container.weight_service.update_weight(
        user.id,
        weight_id,
        form.pet_id,
        form_amount(form.weight, locale, "weight", required=True),
        weighed_at=localize(form.weighed_at, container.settings.default_timezone),
        notes=form.notes or None,
    )
    return serialize_weight(entry, locale)


@router.delete(
    "/{weight_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_confirmation)],
)
async def delete_weight(
    weight_id: UUID,
    request: Request,
    user: AuthenticatedUser = Depends(current_user),
) -> None:
    """Delete a weighing."""
    get_container(request).weight_service.delete_weight(user.id, weight_id)
