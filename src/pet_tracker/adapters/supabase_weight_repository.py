"""Supabase repository for weight entries."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from pet_tracker.adapters.supabase_common import execute, now_iso, parse_datetime
from pet_tracker.adapters.supabase_pet_repository import parse_pet
from pet_tracker.domain.feeding import WeightEntry
from pet_tracker.services.errors import DataAccessError
from pet_tracker.services.weights import WeightRepository

TABLE = "weight_entries"
JOINED_COLUMNS = "*, pet:pets(*)"


@dataclass
class SupabaseWeightRepository(WeightRepository):
    """Supabase implementation for weight entries."""

    client: Client

    def list_weights(  # noqa: PLR0913
        self,
        user_id: UUID,
        pet_id: UUID | None = None,
        start: datetime | None = None,
        end: datetime | None = None,
        desc: bool = True,
        limit: int | None = None,
    ) -> list[WeightEntry]:
        """Return weighings joined with pet, ordered by weighed_at."""

        def build():  # noqa: ANN202
            query = (
                self.client.table(TABLE)
                .select(JOINED_COLUMNS)
                .eq("user_id", str(user_id))
            )
            if pet_id is not None:
                query = query.eq("pet_id", str(pet_id))
            if start is not None:
                query = query.gte("weighed_at", start.isoformat())
            if end is not None:
                query = query.lt("weighed_at", end.isoformat())
            query = query.order("weighed_at", desc=desc)
            if limit is not None:
                query = query.limit(limit)
            return query

        return [parse_weight(row) for row in execute(build, "list weights")]

    def get_weight(self, user_id: UUID, weight_id: UUID) -> WeightEntry | None:
        """Return a weighing by id, if the user owns it."""
        rows = execute(
            lambda: self.client.table(TABLE)
            .select(JOINED_COLUMNS)
            .eq("id", str(weight_id))
            .eq("user_id", str(user_id))
            .limit(1),
            "load weight",
        )
        if not rows:
            return None
        return parse_weight(rows[0])

    def create_weight(self, user_id: UUID, payload: dict[str, object]) -> WeightEntry:
        """Create a weight row stamped with its owner."""
        rows = execute(
            lambda: self.client.table(TABLE).insert(
                {**payload, "user_id": str(user_id)}
            ),
            "create weight",
        )
        if not rows:
            raise DataAccessError("Failed to create weight")
        return parse_weight(rows[0])

    def update_weight(
        self, user_id: UUID, weight_id: UUID, payload: dict[str, object]
    ) -> WeightEntry | None:
        """Update a weight row owned by the user."""
        rows = execute(
            lambda: self.client.table(TABLE)
            .update({**payload, "user_id": str(user_id), "updated_at": now_iso()})
            .eq("id", str(weight_id))
            .eq("user_id", str(user_id)),
            "update weight",
        )
        if not rows:
            return None
        return parse_weight(rows[0])

    def delete_weight(self, user_id: UUID, weight_id: UUID) -> bool:
        """Delete a weight row owned by the user."""
        rows = execute(
            lambda: self.client.table(TABLE)
            .delete()
            .eq("id", str(weight_id))
            .eq("user_id", str(user_id)),
            "delete weight",
        )
        return bool(rows)


def parse_weight(row: dict[str, object]) -> WeightEntry:
    """Parse a weight row, including the embedded pet when present."""
    pet_row = row.get("pet")
    return WeightEntry(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        pet_id=UUID(str(row["pet_id"])),
        weight=float(row.get("weight", 0.0)),
        weighed_at=parse_datetime(row.get("weighed_at")) or datetime.min,
        notes=row.get("notes"),
        created_at=parse_datetime(row.get("created_at")),
        updated_at=parse_datetime(row.get("updated_at")),
        pet=parse_pet(pet_row) if isinstance(pet_row, dict) else None,
    )
