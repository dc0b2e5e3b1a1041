"""Pydantic models for submitted forms."""

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from pet_tracker.domain.pets import Species

# Numbers arrive either as JSON numbers or as text typed by the user, which is
# parsed with the request locale.
FormNumber = float | str


class _Form(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")


class PetForm(_Form):
    """Pet create/edit form."""

    name: str = Field(min_length=1)
    species: Species = Species.DOG
    breed: str | None = None
    birth_date: date | None = None
    target_weight: FormNumber | None = None


class FoodForm(_Form):
    """Food create/edit form."""

    name: str = Field(min_length=1)
    brand: str | None = None
    calories_per_gram: FormNumber | None = None
    protein_per_gram: FormNumber | None = None
    fat_per_gram: FormNumber | None = None
    carbs_per_gram: FormNumber | None = None


class FeedingForm(_Form):
    """Feeding create/edit form."""

    pet_id: UUID
    food_id: UUID
    amount_put_out: FormNumber
    amount_not_eaten: FormNumber | None = None
    amount_refilled: FormNumber | None = None
    fed_at: datetime | None = None
    notes: str | None = None


class WeightForm(_Form):
    """Weight create/edit form."""

    pet_id: UUID
    weight: FormNumber
    weighed_at: datetime | None = None
    notes: str | None = None
