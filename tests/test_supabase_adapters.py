"""Tests for Supabase adapter implementations."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import uuid4

import httpx
import pytest
from postgrest.exceptions import APIError

from pet_tracker.adapters.supabase_feeding_repository import (
    JOINED_COLUMNS,
    SupabaseFeedingRepository,
)
from pet_tracker.adapters.supabase_food_repository import SupabaseFoodRepository
from pet_tracker.adapters.supabase_pet_repository import SupabasePetRepository
from pet_tracker.adapters.supabase_weight_repository import SupabaseWeightRepository
from pet_tracker.domain.pets import Species
from pet_tracker.services.errors import DataAccessError
from tests.conftest import USER_ID


@dataclass
class FakeResponse:
    data: list[dict[str, object]] | None


@dataclass
class FakeTable:
    name: str
    response_queue: dict[str, list[list[dict[str, object]]]] = field(
        default_factory=lambda: {"select": [], "insert": [], "update": [], "delete": []}
    )
    last_payload: object | None = None
    last_columns: str | None = None
    last_filters: list[tuple[str, str, object]] = field(default_factory=list)
    last_order: tuple[str, bool] | None = None
    last_limit: int | None = None
    error: Exception | None = None

    def queue(self, action: str, data: list[dict[str, object]]) -> None:
        self.response_queue[action].append(data)

    def select(self, columns: str = "*") -> "FakeTable":
        self._action = "select"
        self.last_columns = columns
        return self

    def insert(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "insert"
        self.last_payload = payload
        return self

    def update(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "update"
        self.last_payload = payload
        return self

    def delete(self) -> "FakeTable":
        self._action = "delete"
        return self

    def _filter(self, op: str, column: str, value: object) -> "FakeTable":
        self.last_filters.append((op, column, value))
        return self

    def eq(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        return self._filter("eq", column, value)

    def neq(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        return self._filter("neq", column, value)

    def gt(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        return self._filter("gt", column, value)

    def gte(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        return self._filter("gte", column, value)

    def lt(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        return self._filter("lt", column, value)

    def limit(self, count: int) -> "FakeTable":
        self.last_limit = count
        return self

    def order(self, column: str, desc: bool = False) -> "FakeTable":
        self.last_order = (column, desc)
        return self

    def execute(self) -> FakeResponse:
        if self.error is not None:
            raise self.error
        action = getattr(self, "_action", "select")
        queue = self.response_queue.get(action, [])
        data = queue.pop(0) if queue else []
        return FakeResponse(data=data)


@dataclass
class FakeSupabaseClient:
    tables: dict[str, FakeTable] = field(default_factory=dict)

    def table(self, name: str) -> FakeTable:
        if name not in self.tables:
            self.tables[name] = FakeTable(name=name)
        return self.tables[name]


def _pet_row(pet_id: str, name: str = "Rex") -> dict[str, object]:
    return {
        "id": pet_id,
        "user_id": str(USER_ID),
        "name": name,
        "species": "cat",
        "breed": None,
        "birth_date": "2021-06-01",
        "target_weight": "4.50",
        "created_at": "2024-03-01T10:00:00+00:00",
        "updated_at": "2024-03-01T10:00:00+00:00",
    }


def _food_row(food_id: str) -> dict[str, object]:
    return {
        "id": food_id,
        "user_id": str(USER_ID),
        "name": "Kibble",
        "brand": "Acme",
        "calories_per_gram": 3.6,
        "protein_per_gram": None,
        "fat_per_gram": None,
        "carbs_per_gram": None,
    }


def test_supabase_pet_repository_roundtrip() -> None:
    client = FakeSupabaseClient()
    pets_table = client.table("pets")
    pet_id = str(uuid4())
    pets_table.queue("insert", [_pet_row(pet_id)])
    pets_table.queue("select", [_pet_row(pet_id)])

    repository = SupabasePetRepository(client)
    created = repository.create_pet(USER_ID, {"name": "Rex", "species": "cat"})
    pets = repository.list_pets(USER_ID, order_by="name", desc=False)

    assert created.species is Species.CAT
    assert created.birth_date is not None and created.birth_date.year == 2021
    assert created.target_weight == 4.5
    assert pets_table.last_payload == {
        "name": "Rex",
        "species": "cat",
        "user_id": str(USER_ID),
    }
    assert [pet.name for pet in pets] == ["Rex"]
    assert ("eq", "user_id", str(USER_ID)) in pets_table.last_filters
    assert pets_table.last_order == ("name", False)


def test_supabase_pet_repository_update_and_delete_scope_owner() -> None:
    client = FakeSupabaseClient()
    pets_table = client.table("pets")
    pet_id = uuid4()

    repository = SupabasePetRepository(client)
    updated = repository.update_pet(USER_ID, pet_id, {"name": "Rex"})
    deleted = repository.delete_pet(USER_ID, pet_id)

    assert updated is None
    assert deleted is False
    assert pets_table.last_filters.count(("eq", "user_id", str(USER_ID))) == 2
    assert ("eq", "id", str(pet_id)) in pets_table.last_filters
    assert "updated_at" in pets_table.last_payload  # type: ignore[operator]


def test_supabase_food_repository_get() -> None:
    client = FakeSupabaseClient()
    foods_table = client.table("foods")
    food_id = str(uuid4())
    foods_table.queue("select", [_food_row(food_id)])

    repository = SupabaseFoodRepository(client)
    food = repository.get_food(USER_ID, uuid4())
    missing = repository.get_food(USER_ID, uuid4())

    assert food is not None
    assert food.display_name == "Kibble (Acme)"
    assert food.calories_per_gram == 3.6
    assert missing is None
    assert foods_table.last_limit == 1


def test_supabase_feeding_repository_lists_with_join() -> None:
    client = FakeSupabaseClient()
    feedings_table = client.table("feeding_entries")
    pet_id = str(uuid4())
    food_id = str(uuid4())
    feedings_table.queue(
        "select",
        [
            {
                "id": str(uuid4()),
                "user_id": str(USER_ID),
                "pet_id": pet_id,
                "food_id": food_id,
                "amount_put_out": "100.00",
                "amount_not_eaten": "20.00",
                "amount_refilled": None,
                "actual_consumed": "80.00",
                "calories_consumed": "288.00",
                "fed_at": "2024-03-10T08:00:00+00:00",
                "notes": None,
                "pet": _pet_row(pet_id),
                "food": _food_row(food_id),
            }
        ],
    )
    start = datetime(2024, 3, 1, tzinfo=UTC)
    end = datetime(2024, 3, 31, tzinfo=UTC)

    repository = SupabaseFeedingRepository(client)
    feedings = repository.list_feedings(
        USER_ID, start=start, end=end, desc=False, limit=10
    )

    assert feedings_table.last_columns == JOINED_COLUMNS
    assert ("gte", "fed_at", start.isoformat()) in feedings_table.last_filters
    assert ("lt", "fed_at", end.isoformat()) in feedings_table.last_filters
    assert feedings_table.last_order == ("fed_at", False)
    assert feedings_table.last_limit == 10
    feeding = feedings[0]
    assert feeding.actual_consumed == 80
    assert feeding.amount_refilled is None
    assert feeding.pet is not None and feeding.pet.name == "Rex"
    assert feeding.food is not None and feeding.food.name == "Kibble"


def test_supabase_feeding_repository_previous_feeding() -> None:
    client = FakeSupabaseClient()
    feedings_table = client.table("feeding_entries")
    pet_id = uuid4()
    food_id = uuid4()
    exclude_id = uuid4()
    before = datetime(2024, 3, 10, 12, 0, tzinfo=UTC)

    repository = SupabaseFeedingRepository(client)
    previous = repository.get_previous_feeding(
        USER_ID, pet_id, food_id, before=before, exclude_id=exclude_id
    )

    assert previous is None
    assert ("eq", "pet_id", str(pet_id)) in feedings_table.last_filters
    assert ("eq", "food_id", str(food_id)) in feedings_table.last_filters
    assert ("lt", "fed_at", before.isoformat()) in feedings_table.last_filters
    assert ("neq", "id", str(exclude_id)) in feedings_table.last_filters
    assert feedings_table.last_order == ("fed_at", True)
    assert feedings_table.last_limit == 1


def test_supabase_feeding_repository_next_feeding() -> None:
    client = FakeSupabaseClient()
    feedings_table = client.table("feeding_entries")
    pet_id = uuid4()
    food_id = uuid4()
    anchor_id = uuid4()
    after = datetime(2024, 3, 10, 11, 30, tzinfo=UTC)
    next_id = str(uuid4())
    feedings_table.queue(
        "select",
        [
            {
                "id": next_id,
                "user_id": str(USER_ID),
                "pet_id": str(pet_id),
                "food_id": str(food_id),
                "amount_put_out": "40.00",
                "amount_not_eaten": None,
                "amount_refilled": None,
                "actual_consumed": "110.00",
                "calories_consumed": None,
                "fed_at": "2024-03-10T14:30:00+00:00",
                "notes": None,
            }
        ],
    )

    repository = SupabaseFeedingRepository(client)
    following = repository.get_next_feeding(
        USER_ID, pet_id, food_id, after=after, exclude_id=anchor_id
    )

    assert following is not None
    assert str(following.id) == next_id
    assert following.amount_put_out == 40
    assert feedings_table.last_columns == JOINED_COLUMNS
    assert ("gt", "fed_at", after.isoformat()) in feedings_table.last_filters
    assert ("neq", "id", str(anchor_id)) in feedings_table.last_filters
    assert feedings_table.last_order == ("fed_at", False)
    assert feedings_table.last_limit == 1


def test_supabase_weight_repository_create() -> None:
    client = FakeSupabaseClient()
    weights_table = client.table("weight_entries")
    pet_id = str(uuid4())
    weights_table.queue(
        "insert",
        [
            {
                "id": str(uuid4()),
                "user_id": str(USER_ID),
                "pet_id": pet_id,
                "weight": "4.20",
                "weighed_at": "2024-03-10T08:00:00+00:00",
                "notes": "after breakfast",
            }
        ],
    )

    repository = SupabaseWeightRepository(client)
    entry = repository.create_weight(USER_ID, {"pet_id": pet_id, "weight": 4.2})

    assert entry.weight == 4.2
    assert entry.pet is None
    assert entry.notes == "after breakfast"
    assert weights_table.last_payload == {
        "pet_id": pet_id,
        "weight": 4.2,
        "user_id": str(USER_ID),
    }


def test_create_without_rows_is_an_error() -> None:
    repository = SupabaseWeightRepository(FakeSupabaseClient())

    with pytest.raises(DataAccessError):
        repository.create_weight(USER_ID, {"pet_id": str(uuid4()), "weight": 1.0})


@pytest.mark.parametrize(
    "error",
    [
        APIError({"message": "permission denied", "code": "42501"}),
        httpx.ConnectError("connection refused"),
    ],
)
def test_backend_failures_become_data_access_errors(error: Exception) -> None:
    client = FakeSupabaseClient()
    client.table("pets").error = error

    with pytest.raises(DataAccessError, match="Failed to list pets") as excinfo:
        SupabasePetRepository(client).list_pets(USER_ID)

    assert excinfo.value.__cause__ is error
