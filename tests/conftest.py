"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import datetime
from itertools import count
from uuid import UUID, uuid4

import pytest

from pet_tracker.adapters.supabase_common import now_iso
from pet_tracker.adapters.supabase_feeding_repository import parse_feeding
from pet_tracker.adapters.supabase_food_repository import parse_food
from pet_tracker.adapters.supabase_pet_repository import parse_pet
from pet_tracker.adapters.supabase_weight_repository import parse_weight
from pet_tracker.config import Settings
from pet_tracker.containers import AppContainer
from pet_tracker.domain.feeding import FeedingEntry, WeightEntry
from pet_tracker.domain.foods import Food
from pet_tracker.domain.models import AuthenticatedUser
from pet_tracker.domain.pets import Pet
from pet_tracker.services.analytics import AnalyticsService
from pet_tracker.services.auth import AuthGateway, AuthService
from pet_tracker.services.dashboard import DashboardService
from pet_tracker.services.feeding import FeedingRepository, FeedingService
from pet_tracker.services.foods import FoodRepository, FoodService
from pet_tracker.services.pets import PetRepository, PetService
from pet_tracker.services.weights import WeightRepository, WeightService

USER_ID = UUID("11111111-1111-1111-1111-111111111111")
OTHER_USER_ID = UUID("22222222-2222-2222-2222-222222222222")
TOKEN = "user-token"
OTHER_TOKEN = "other-token"


@dataclass
class InMemoryDatabase:
    """Row storage shared by the in-memory repositories.

    Rows are kept in the same shape Supabase returns them so the adapters'
    row parsers can be reused.
    """

    pets: dict[str, dict[str, object]] = field(default_factory=dict)
    foods: dict[str, dict[str, object]] = field(default_factory=dict)
    feedings: dict[str, dict[str, object]] = field(default_factory=dict)
    weights: dict[str, dict[str, object]] = field(default_factory=dict)
    sequence: count = field(default_factory=count)

    def insert(
        self, table: dict[str, dict[str, object]], user_id: UUID, payload: dict
    ) -> dict[str, object]:
        row_id = str(uuid4())
        stamp = now_iso()
        row = {
            **payload,
            "id": row_id,
            "user_id": str(user_id),
            "created_at": stamp,
            "updated_at": stamp,
            "_seq": next(self.sequence),
        }
        table[row_id] = row
        return row

    def update(
        self,
        table: dict[str, dict[str, object]],
        user_id: UUID,
        row_id: UUID,
        payload: dict,
    ) -> dict[str, object] | None:
        row = self.owned(table, user_id, row_id)
        if row is None:
            return None
        row.update(payload)
        row["updated_at"] = now_iso()
        return row

    def delete(
        self, table: dict[str, dict[str, object]], user_id: UUID, row_id: UUID
    ) -> bool:
        if self.owned(table, user_id, row_id) is None:
            return False
        del table[str(row_id)]
        return True

    def owned(
        self, table: dict[str, dict[str, object]], user_id: UUID, row_id: UUID
    ) -> dict[str, object] | None:
        row = table.get(str(row_id))
        if row is None or row["user_id"] != str(user_id):
            return None
        return row

    def rows_for(
        self, table: dict[str, dict[str, object]], user_id: UUID
    ) -> list[dict[str, object]]:
        return [row for row in table.values() if row["user_id"] == str(user_id)]

    def cascade(self, column: str, value: UUID) -> None:
        for table in (self.feedings, self.weights):
            for row_id in [
                key for key, row in table.items() if row.get(column) == str(value)
            ]:
                del table[row_id]


def _ordered(
    rows: list[dict[str, object]], order_by: str, desc: bool
) -> list[dict[str, object]]:
    return sorted(
        rows, key=lambda row: (str(row.get(order_by) or ""), row["_seq"]), reverse=desc
    )


@dataclass
class InMemoryPetRepository(PetRepository):
    """In-memory pet repository for tests."""

    db: InMemoryDatabase

    def list_pets(
        self, user_id: UUID, order_by: str = "created_at", desc: bool = True
    ) -> list[Pet]:
        rows = _ordered(self.db.rows_for(self.db.pets, user_id), order_by, desc)
        return [parse_pet(row) for row in rows]

    def get_pet(self, user_id: UUID, pet_id: UUID) -> Pet | None:
        row = self.db.owned(self.db.pets, user_id, pet_id)
        return parse_pet(row) if row else None

    def create_pet(self, user_id: UUID, payload: dict[str, object]) -> Pet:
        return parse_pet(self.db.insert(self.db.pets, user_id, payload))

    def update_pet(
        self, user_id: UUID, pet_id: UUID, payload: dict[str, object]
    ) -> Pet | None:
        row = self.db.update(self.db.pets, user_id, pet_id, payload)
        return parse_pet(row) if row else None

    def delete_pet(self, user_id: UUID, pet_id: UUID) -> bool:
        deleted = self.db.delete(self.db.pets, user_id, pet_id)
        if deleted:
            self.db.cascade("pet_id", pet_id)
        return deleted


@dataclass
class InMemoryFoodRepository(FoodRepository):
    """In-memory food repository for tests."""

    db: InMemoryDatabase

    def list_foods(
        self, user_id: UUID, order_by: str = "created_at", desc: bool = True
    ) -> list[Food]:
        rows = _ordered(self.db.rows_for(self.db.foods, user_id), order_by, desc)
        return [parse_food(row) for row in rows]

    def get_food(self, user_id: UUID, food_id: UUID) -> Food | None:
        row = self.db.owned(self.db.foods, user_id, food_id)
        return parse_food(row) if row else None

    def create_food(self, user_id: UUID, payload: dict[str, object]) -> Food:
        return parse_food(self.db.insert(self.db.foods, user_id, payload))

    def update_food(
        self, user_id: UUID, food_id: UUID, payload: dict[str, object]
    ) -> Food | None:
        row = self.db.update(self.db.foods, user_id, food_id, payload)
        return parse_food(row) if row else None

    def delete_food(self, user_id: UUID, food_id: UUID) -> bool:
        deleted = self.db.delete(self.db.foods, user_id, food_id)
        if deleted:
            self.db.cascade("food_id", food_id)
        return deleted


def _in_window(
    moment: datetime, start: datetime | None, end: datetime | None
) -> bool:
    if start is not None and moment < start:
        return False
    return end is None or moment < end


@dataclass
class InMemoryFeedingRepository(FeedingRepository):
    """In-memory feeding repository that embeds pet and food like the join."""

    db: InMemoryDatabase

    def _joined(self, row: dict[str, object]) -> FeedingEntry:
        return parse_feeding(
            {
                **row,
                "pet": self.db.pets.get(str(row["pet_id"])),
                "food": self.db.foods.get(str(row["food_id"])),
            }
        )

    def list_feedings(  # noqa: PLR0913
        self,
        user_id: UUID,
        pet_id: UUID | None = None,
        start: datetime | None = None,
        end: datetime | None = None,
        desc: bool = True,
        limit: int | None = None,
    ) -> list[FeedingEntry]:
        entries = [
            self._joined(row)
            for row in self.db.rows_for(self.db.feedings, user_id)
            if pet_id is None or row["pet_id"] == str(pet_id)
        ]
        entries = [entry for entry in entries if _in_window(entry.fed_at, start, end)]
        entries.sort(key=lambda entry: entry.fed_at, reverse=desc)
        return entries[:limit] if limit is not None else entries

    def get_feeding(self, user_id: UUID, feeding_id: UUID) -> FeedingEntry | None:
        row = self.db.owned(self.db.feedings, user_id, feeding_id)
        return self._joined(row) if row else None

    def get_previous_feeding(  # noqa: PLR0913
        self,
        user_id: UUID,
        pet_id: UUID,
        food_id: UUID,
        before: datetime,
        exclude_id: UUID | None = None,
    ) -> FeedingEntry | None:
        candidates = [
            entry
            for entry in self.list_feedings(user_id, pet_id=pet_id, end=before)
            if entry.food_id == food_id and entry.id != exclude_id
        ]
        return candidates[0] if candidates else None

    def get_next_feeding(  # noqa: PLR0913
        self,
        user_id: UUID,
        pet_id: UUID,
        food_id: UUID,
        after: datetime,
        exclude_id: UUID | None = None,
    ) -> FeedingEntry | None:
        candidates = [
            entry
            for entry in self.list_feedings(user_id, pet_id=pet_id, desc=False)
            if entry.food_id == food_id
            and entry.id != exclude_id
            and entry.fed_at > after
        ]
        return candidates[0] if candidates else None

    def create_feeding(
        self, user_id: UUID, payload: dict[str, object]
    ) -> FeedingEntry:
        return self._joined(self.db.insert(self.db.feedings, user_id, payload))

    def update_feeding(
        self, user_id: UUID, feeding_id: UUID, payload: dict[str, object]
    ) -> FeedingEntry | None:
        row = self.db.update(self.db.feedings, user_id, feeding_id, payload)
        return self._joined(row) if row else None

    def delete_feeding(self, user_id: UUID, feeding_id: UUID) -> bool:
        return self.db.delete(self.db.feedings, user_id, feeding_id)


@dataclass
class InMemoryWeightRepository(WeightRepository):
    """In-memory weight repository that embeds the pet like the join."""

    db: InMemoryDatabase

    def _joined(self, row: dict[str, object]) -> WeightEntry:
        return parse_weight({**row, "pet": self.db.pets.get(str(row["pet_id"]))})

    def list_weights(  # noqa: PLR0913
        self,
        user_id: UUID,
        pet_id: UUID | None = None,
        start: datetime | None = None,
        end: datetime | None = None,
        desc: bool = True,
        limit: int | None = None,
    ) -> list[WeightEntry]:
        entries = [
            self._joined(row)
            for row in self.db.rows_for(self.db.weights, user_id)
            if pet_id is None or row["pet_id"] == str(pet_id)
        ]
        entries = [
            entry for entry in entries if _in_window(entry.weighed_at, start, end)
        ]
        entries.sort(key=lambda entry: entry.weighed_at, reverse=desc)
        return entries[:limit] if limit is not None else entries

    def get_weight(self, user_id: UUID, weight_id: UUID) -> WeightEntry | None:
        row = self.db.owned(self.db.weights, user_id, weight_id)
        return self._joined(row) if row else None

    def create_weight(self, user_id: UUID, payload: dict[str, object]) -> WeightEntry:
        return self._joined(self.db.insert(self.db.weights, user_id, payload))

    def update_weight(
        self, user_id: UUID, weight_id: UUID, payload: dict[str, object]
    ) -> WeightEntry | None:
        row = self.db.update(self.db.weights, user_id, weight_id, payload)
        return self._joined(row) if row else None

    def delete_weight(self, user_id: UUID, weight_id: UUID) -> bool:
        return self.db.delete(self.db.weights, user_id, weight_id)


@dataclass
class FakeAuthGateway(AuthGateway):
    """Auth gateway with a fixed token table."""

    users: dict[str, AuthenticatedUser] = field(
        default_factory=lambda: {
            TOKEN: AuthenticatedUser(id=USER_ID, email="owner@example.com"),
            OTHER_TOKEN: AuthenticatedUser(id=OTHER_USER_ID, email=None),
        }
    )
    seen: list[str] = field(default_factory=list)

    def get_user(self, access_token: str) -> AuthenticatedUser | None:
        self.seen.append(access_token)
        return self.users.get(access_token)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="service-key",
        mock_user_id=None,
    )


@pytest.fixture
def db() -> InMemoryDatabase:
    return InMemoryDatabase()


@pytest.fixture
def pet_repository(db: InMemoryDatabase) -> InMemoryPetRepository:
    return InMemoryPetRepository(db)


@pytest.fixture
def food_repository(db: InMemoryDatabase) -> InMemoryFoodRepository:
    return InMemoryFoodRepository(db)


@pytest.fixture
def feeding_repository(db: InMemoryDatabase) -> InMemoryFeedingRepository:
    return InMemoryFeedingRepository(db)


@pytest.fixture
def weight_repository(db: InMemoryDatabase) -> InMemoryWeightRepository:
    return InMemoryWeightRepository(db)


@pytest.fixture
def container(  # noqa: PLR0913
    settings: Settings,
    pet_repository: InMemoryPetRepository,
    food_repository: InMemoryFoodRepository,
    feeding_repository: InMemoryFeedingRepository,
    weight_repository: InMemoryWeightRepository,
) -> AppContainer:
    pet_service = PetService(pet_repository)
    feeding_service = FeedingService(
        repository=feeding_repository,
        pet_repository=pet_repository,
        food_repository=food_repository,
    )
    weight_service = WeightService(weight_repository, pet_repository)
    return AppContainer(
        settings=settings,
        auth_service=AuthService(gateway=FakeAuthGateway()),
        pet_service=pet_service,
        food_service=FoodService(food_repository),
        feeding_service=feeding_service,
        weight_service=weight_service,
        dashboard_service=DashboardService(
            pet_service=pet_service,
            feeding_service=feeding_service,
            weight_service=weight_service,
        ),
        analytics_service=AnalyticsService(
            feeding_repository=feeding_repository,
            weight_repository=weight_repository,
        ),
    )


@pytest.fixture
def auth_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {TOKEN}"}
