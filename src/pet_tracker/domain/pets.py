"""Domain models for pets."""

from dataclasses import dataclass
from datetime import date, datetime
from enum import StrEnum
from uuid import UUID

MONTHS_PER_YEAR = 12


class Species(StrEnum):
    """Supported pet species."""

    DOG = "dog"
    CAT = "cat"
    BIRD = "bird"
    RABBIT = "rabbit"
    OTHER = "other"


@dataclass(frozen=True)
class Pet:
    """Represents a pet owned by a user."""

    id: UUID
    user_id: UUID
    name: str
    species: Species
    breed: str | None
    birth_date: date | None
    target_weight: float | None
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class PetAge:
    """Whole years and remaining months since birth."""

    years: int
    months: int


def pet_age(birth_date: date, today: date) -> PetAge:
    """Return the completed years and months between birth and today."""
    total_months = (today.year - birth_date.year) * MONTHS_PER_YEAR + (
        today.month - birth_date.month
    )
    if today.day < birth_date.day:
        total_months -= 1
    total_months = max(total_months, 0)
    return PetAge(
        years=total_months // MONTHS_PER_YEAR,
        months=total_months % MONTHS_PER_YEAR,
    )


def format_age(age: PetAge) -> str:
    """Render an age as "2 years 3 months", dropping empty parts."""
    months = f"{age.months} month{'s' if age.months != 1 else ''}"
    if age.years == 0:
        return months
    years = f"{age.years} year{'s' if age.years != 1 else ''}"
    if age.months == 0:
        return years
    return f"{years} {months}"
