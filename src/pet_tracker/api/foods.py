"""Food catalog endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, Request, status

from pet_tracker.api.deps import (
    current_user,
    form_amount,
    get_container,
    request_locale,
    require_confirmation,
)
from pet_tracker.api.forms import FoodForm
from pet_tracker.api.serializers import serialize_food
from pet_tracker.domain.models import AuthenticatedUser

router = APIRouter(prefix="/foods", tags=["foods"])

DENSITY_PRECISION = 3
_DENSITY_FIELDS = (
    "calories_per_gram",
    "protein_per_gram",
    "fat_per_gram",
    "carbs_per_gram",
)


def _payload(form: FoodForm, locale: str) -> dict[str, object]:
    payload: dict[str, object] = {"name": form.name, "brand": form.brand or None}
    for field in _DENSITY_FIELDS:
        value = form_amount(getattr(form, field), locale, field)
        payload[field] = round(value, DENSITY_PRECISION) if value is not None else None
    return payload


@router.get("")
async def list_foods(
    request: Request,
    user: AuthenticatedUser = Depends(current_user),
) -> dict[str, object]:
    """Return the user's foods, newest first."""
    foods = get_container(request).food_service.list_foods(user.id)
    return {"foods": [serialize_food(food) for food in foods]}


@router.get("/{food_id}")
async def get_food(
    food_id: UUID,
    request: Request,
    user: AuthenticatedUser = Depends(current_user),
) -> dict[str, object]:
    """Return one food."""
    return serialize_food(get_container(request).food_service.get_food(user.id, food_id))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_food(
    form: FoodForm,
    request: Request,
    user: AuthenticatedUser = Depends(current_user),
    locale: str = Depends(request_locale),
) -> dict[str, object]:
    """Add a food to the catalog."""
    food = get_container(request).food_service.create_food(
        user.id, _payload(form, locale)
    )
    return serialize_food(food)


@router.put("/{food_id}")
async def update_food(
    food_id: UUID,
    form: FoodForm,
    request: Request,
    user: AuthenticatedUser = Depends(current_user),
    locale: str = Depends(request_locale),
) -> dict[str, object]:
    """Update a catalog entry."""
    food = get_container(request).food_service.update_food(
        user.id, food_id, _payload(form, locale)
    )
    return serialize_food(food)


@router.delete(
    "/{food_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_confirmation)],
)
async def delete_food(
    food_id: UUID,
    request: Request,
    user: AuthenticatedUser = Depends(current_user),
) -> None:
    """Delete a food and the feedings that used it."""
    get_container(request).food_service.delete_food(user.id, food_id)
