"""Domain models for the food catalog."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class Food:
    """A food with optional per-gram nutritional density."""

    id: UUID
    user_id: UUID
    name: str
    brand: str | None
    calories_per_gram: float | None
    protein_per_gram: float | None
    fat_per_gram: float | None
    carbs_per_gram: float | None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def display_name(self) -> str:
        """Name with the brand in parentheses when present."""
        if self.brand:
            return f"{self.name} ({self.brand})"
        return self.name
