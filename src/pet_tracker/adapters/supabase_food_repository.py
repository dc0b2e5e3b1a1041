"""Supabase implementation for the food catalog."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from pet_tracker.adapters.supabase_common import (
    execute,
    now_iso,
    optional_float,
    parse_datetime,
)
from pet_tracker.domain.foods import Food
from pet_tracker.services.errors import DataAccessError
from pet_tracker.services.foods import FoodRepository

TABLE = "foods"


@dataclass
class SupabaseFoodRepository(FoodRepository):
    """Supabase-backed repository for foods."""

    client: Client

    def list_foods(
        self, user_id: UUID, order_by: str = "created_at", desc: bool = True
    ) -> list[Food]:
        """Return the user's foods in the given order."""
        rows = execute(
            lambda: self.client.table(TABLE)
            .select("*")
            .eq("user_id", str(user_id))
            .order(order_by, desc=desc),
            "list foods",
        )
        return [parse_food(row) for row in rows]

    def get_food(self, user_id: UUID, food_id: UUID) -> Food | None:
        """Return a food by id, if the user owns it."""
        rows = execute(
            lambda: self.client.table(TABLE)
            .select("*")
            .eq("id", str(food_id))
            .eq("user_id", str(user_id))
            .limit(1),
            "load food",
        )
        if not rows:
            return None
        return parse_food(rows[0])

    def create_food(self, user_id: UUID, payload: dict[str, object]) -> Food:
        """Create a food row stamped with its owner."""
        rows = execute(
            lambda: self.client.table(TABLE).insert(
                {**payload, "user_id": str(user_id)}
            ),
            "create food",
        )
        if not rows:
            raise DataAccessError("Failed to create food")
        return parse_food(rows[0])

    def update_food(
        self, user_id: UUID, food_id: UUID, payload: dict[str, object]
    ) -> Food | None:
        """Update a food row owned by the user."""
        rows = execute(
            lambda: self.client.table(TABLE)
            .update({**payload, "user_id": str(user_id), "updated_at": now_iso()})
            .eq("id", str(food_id))
            .eq("user_id", str(user_id)),
            "update food",
        )
        if not rows:
            return None
        return parse_food(rows[0])

    def delete_food(self, user_id: UUID, food_id: UUID) -> bool:
        """Delete a food row owned by the user."""
        rows = execute(
            lambda: self.client.table(TABLE)
            .delete()
            .eq("id", str(food_id))
            .eq("user_id", str(user_id)),
            "delete food",
        )
        return bool(rows)


def parse_food(row: dict[str, object]) -> Food:
    """Parse a foods row into a domain model."""
    return Food(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        name=str(row.get("name", "")),
        brand=row.get("brand"),
        calories_per_gram=optional_float(row.get("calories_per_gram")),
        protein_per_gram=optional_float(row.get("protein_per_gram")),
        fat_per_gram=optional_float(row.get("fat_per_gram")),
        carbs_per_gram=optional_float(row.get("carbs_per_gram")),
        created_at=parse_datetime(row.get("created_at")),
        updated_at=parse_datetime(row.get("updated_at")),
    )
