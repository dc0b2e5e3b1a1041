"""Supabase repository for pets."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from pet_tracker.adapters.supabase_common import (
    execute,
    now_iso,
    optional_float,
    parse_date,
    parse_datetime,
)
from pet_tracker.domain.pets import Pet, Species
from pet_tracker.services.errors import DataAccessError
from pet_tracker.services.pets import PetRepository

TABLE = "pets"


@dataclass
class SupabasePetRepository(PetRepository):
    """Supabase implementation for pets."""

    client: Client

    def list_pets(
        self, user_id: UUID, order_by: str = "created_at", desc: bool = True
    ) -> list[Pet]:
        """Return the user's pets in the given order."""
        rows = execute(
            lambda: self.client.table(TABLE)
            .select("*")
            .eq("user_id", str(user_id))
            .order(order_by, desc=desc),
            "list pets",
        )
        return [parse_pet(row) for row in rows]

    def get_pet(self, user_id: UUID, pet_id: UUID) -> Pet | None:
        """Return a pet by id, if the user owns it."""
        rows = execute(
            lambda: self.client.table(TABLE)
            .select("*")
            .eq("id", str(pet_id))
            .eq("user_id", str(user_id))
            .limit(1),
            "load pet",
        )
        if not rows:
            return None
        return parse_pet(rows[0])

    def create_pet(self, user_id: UUID, payload: dict[str, object]) -> Pet:
        """Create a pet row stamped with its owner."""
        rows = execute(
            lambda: self.client.table(TABLE).insert(
                {**payload, "user_id": str(user_id)}
            ),
            "create pet",
        )
        if not rows:
            raise DataAccessError("Failed to create pet")
        return parse_pet(rows[0])

    def update_pet(
        self, user_id: UUID, pet_id: UUID, payload: dict[str, object]
    ) -> Pet | None:
        """Update a pet row owned by the user."""
        rows = execute(
            lambda: self.client.table(TABLE)
            .update({**payload, "user_id": str(user_id), "updated_at": now_iso()})
            .eq("id", str(pet_id))
            .eq("user_id", str(user_id)),
            "update pet",
        )
        if not rows:
            return None
        return parse_pet(rows[0])

    def delete_pet(self, user_id: UUID, pet_id: UUID) -> bool:
        """Delete a pet row owned by the user."""
        rows = execute(
            lambda: self.client.table(TABLE)
            .delete()
            .eq("id", str(pet_id))
            .eq("user_id", str(user_id)),
            "delete pet",
        )
        return bool(rows)


def parse_pet(row: dict[str, object]) -> Pet:
    """Parse a pets row into a domain model."""
    return Pet(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        name=str(row.get("name", "")),
        species=Species(row.get("species") or Species.OTHER),
        breed=row.get("breed"),
        birth_date=parse_date(row.get("birth_date")),
        target_weight=optional_float(row.get("target_weight")),
        created_at=parse_datetime(row.get("created_at")),
        updated_at=parse_datetime(row.get("updated_at")),
    )
