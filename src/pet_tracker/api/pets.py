"""Pet endpoints."""

from datetime import date
from uuid import UUID

from fastapi import APIRouter, Depends, Request, status

from pet_tracker.api.deps import (
    current_user,
    form_amount,
    get_container,
    request_locale,
    request_today,
    require_confirmation,
)
from pet_tracker.api.forms import PetForm
from pet_tracker.api.serializers import serialize_pet
from pet_tracker.domain.models import AuthenticatedUser

router = APIRouter(prefix="/pets", tags=["pets"])


def _payload(form: PetForm, locale: str) -> dict[str, object]:
    target_weight = form_amount(form.target_weight, locale, "target_weight")
    return {
        "name": form.name,
        "species": form.species.value,
        "breed": form.breed or None,
        "birth_date": form.birth_date.isoformat() if form.birth_date else None,
        "target_weight": round(target_weight, 2) if target_weight is not None else None,
    }


@router.get("")
async def list_pets(
    request: Request,
    user: AuthenticatedUser = Depends(current_user),
    today: date = Depends(request_today),
) -> dict[str, object]:
    """Return the user's pets, newest first."""
    pets = get_container(request).pet_service.list_pets(user.id)
    return {"pets": [serialize_pet(pet, today) for pet in pets]}


@router.get("/{pet_id}")
async def get_pet(
    pet_id: UUID,
    request: Request,
    user: AuthenticatedUser = Depends(current_user),
    today: date = Depends(request_today),
) -> dict[str, object]:
    """Return one pet."""
    pet = get_container(request).pet_service.get_pet(user.id, pet_id)
    return serialize_pet(pet, today)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_pet(
    form: PetForm,
    request: Request,
    user: AuthenticatedUser = Depends(current_user),
    locale: str = Depends(request_locale),
    today: date = Depends(request_today),
) -> dict[str, object]:
    """Create a pet."""
    pet = get_container(request).pet_service.create_pet(
        user.id, _payload(form, locale)
    )
    return serialize_pet(pet, today)


@router.put("/{pet_id}")
async def update_pet(
    pet_id: UUID,
    form: PetForm,
    request: Request,
    user: AuthenticatedUser = Depends(current_user),
    locale: str = Depends(request_locale),
    today: date = Depends(request_today),
) -> dict[str, object]:
    """Update a pet."""
    pet = get_container(request).pet_service.update_pet(
        user.id, pet_id, _payload(form, locale)
    )
    return serialize_pet(pet, today)


@router.delete(
    "/{pet_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_confirmation)],
)
async def delete_pet(
    pet_id: UUID,
    request: Request,
    user: AuthenticatedUser = Depends(current_user),
) -> None:
    """Delete a pet with all of its feeding and weight records."""
    get_container(request).pet_service.delete_pet(user.id, pet_id)
