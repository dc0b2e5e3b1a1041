"""Supabase repository for feeding entries."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from pet_tracker.adapters.supabase_common import (
    execute,
    now_iso,
    optional_float,
    parse_datetime,
)
from pet_tracker.adapters.supabase_food_repository import parse_food
from pet_tracker.adapters.supabase_pet_repository import parse_pet
from pet_tracker.domain.feeding import FeedingEntry
from pet_tracker.services.errors import DataAccessError
from pet_tracker.services.feeding import FeedingRepository

TABLE = "feeding_entries"
JOINED_COLUMNS = "*, pet:pets(*), food:foods(*)"


@dataclass
class SupabaseFeedingRepository(FeedingRepository):
    """Supabase implementation for feeding entries."""

    client: Client

    def list_feedings(  # noqa: PLR0913
        self,
        user_id: UUID,
        pet_id: UUID | None = None,
        start: datetime | None = None,
        end: datetime | None = None,
        desc: bool = True,
        limit: int | None = None,
    ) -> list[FeedingEntry]:
        """Return feedings joined with pet and food, ordered by fed_at."""

        def build():  # noqa: ANN202
            query = (
                self.client.table(TABLE)
                .select(JOINED_COLUMNS)
                .eq("user_id", str(user_id))
            )
            if pet_id is not None:
                query = query.eq("pet_id", str(pet_id))
            if start is not None:
                query = query.gte("fed_at", start.isoformat())
            if end is not None:
                query = query.lt("fed_at", end.isoformat())
            query = query.order("fed_at", desc=desc)
            if limit is not None:
                query = query.limit(limit)
            return query

        return [parse_feeding(row) for row in execute(build, "list feedings")]

    def get_feeding(self, user_id: UUID, feeding_id: UUID) -> FeedingEntry | None:
        """Return a feeding by id, if the user owns it."""
        rows = execute(
            lambda: self.client.table(TABLE)
            .select(JOINED_COLUMNS)
            .eq("id", str(feeding_id))
            .eq("user_id", str(user_id))
            .limit(1),
            "load feeding",
        )
        if not rows:
            return None
        return parse_feeding(rows[0])

    def get_previous_feeding(  # noqa: PLR0913
        self,
        user_id: UUID,
        pet_id: UUID,
        food_id: UUID,
        before: datetime,
        exclude_id: UUID | None = None,
    ) -> FeedingEntry | None:
        """Return the latest feeding of the same pet and food before a time."""

        def build():  # noqa: ANN202
            query = (
                self.client.table(TABLE)
                .select("*")
                .eq("user_id", str(user_id))
                .eq("pet_id", str(pet_id))
                .eq("food_id", str(food_id))
                .lt("fed_at", before.isoformat())
            )
            if exclude_id is not None:
                query = query.neq("id", str(exclude_id))
            return query.order("fed_at", desc=True).limit(1)

        rows = execute(build, "load previous feeding")
        if not rows:
            return None
        return parse_feeding(rows[0])

    def get_next_feeding(  # noqa: PLR0913
        self,
        user_id: UUID,
        pet_id: UUID,
        food_id: UUID,
        after: datetime,
        exclude_id: UUID | None = None,
    ) -> FeedingEntry | None:
        """Return the earliest feeding of the same pet and food after a time."""

        def build():  # noqa: ANN202
            query = (
                self.client.table(TABLE)
                .select(JOINED_COLUMNS)
                .eq("user_id", str(user_id))
                .eq("pet_id", str(pet_id))
                .eq("food_id", str(food_id))
                .gt("fed_at", after.isoformat())
            )
            if exclude_id is not None:
                query = query.neq("id", str(exclude_id))
            return query.order("fed_at", desc=False).limit(1)

        rows = execute(build, "load next feeding")
        if not rows:
            return None
        return parse_feeding(rows[0])

    def create_feeding(
        self, user_id: UUID, payload: dict[str, object]
    ) -> FeedingEntry:
        """Create a feeding row stamped with its owner."""
        rows = execute(
            lambda: self.client.table(TABLE).insert(
                {**payload, "user_id": str(user_id)}
            ),
            "create feeding",
        )
        if not rows:
            raise DataAccessError("Failed to create feeding")
        return parse_feeding(rows[0])

    def update_feeding(
        self, user_id: UUID, feeding_id: UUID, payload: dict[str, object]
    ) -> FeedingEntry | None:
        """Update a feeding row owned by the user."""
        rows = execute(
            lambda: self.client.table(TABLE)
            .update({**payload, "user_id": str(user_id), "updated_at": now_iso()})
            .eq("id", str(feeding_id))
            .eq("user_id", str(user_id)),
            "update feeding",
        )
        if not rows:
            return None
        return parse_feeding(rows[0])

    def delete_feeding(self, user_id: UUID, feeding_id: UUID) -> bool:
        """Delete a feeding row owned by the user."""
        rows = execute(
            lambda: self.client.table(TABLE)
            .delete()
            .eq("id", str(feeding_id))
            .eq("user_id", str(user_id)),
            "delete feeding",
        )
        return bool(rows)


def parse_feeding(row: dict[str, object]) -> FeedingEntry:
    """Parse a feeding row, including embedded pet and food when present."""
    pet_row = row.get("pet")
    food_row = row.get("food")
    return FeedingEntry(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        pet_id=UUID(str(row["pet_id"])),
        food_id=UUID(str(row["food_id"])),
        amount_put_out=float(row.get("amount_put_out", 0.0)),
        amount_not_eaten=optional_float(row.get("amount_not_eaten")),
        amount_refilled=optional_float(row.get("amount_refilled")),
        actual_consumed=optional_float(row.get("actual_consumed")),
        calories_consumed=optional_float(row.get("calories_consumed")),
        fed_at=parse_datetime(row.get("fed_at")) or datetime.min,
        notes=row.get("notes"),
        created_at=parse_datetime(row.get("created_at")),
        updated_at=parse_datetime(row.get("updated_at")),
        pet=parse_pet(pet_row) if isinstance(pet_row, dict) else None,
        food=parse_food(food_row) if isinstance(food_row, dict) else None,
    )
