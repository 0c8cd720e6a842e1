"""Shared test fixtures."""

import asyncio
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime

import pytest

from menu_ranker.adapters.fatsecret_auth import CredentialProvider
from menu_ranker.adapters.fatsecret_client import FatSecretClient
from menu_ranker.config import Settings
from menu_ranker.containers import AppContainer
from menu_ranker.domain.menu import MenuItem, RestaurantRecord
from menu_ranker.services.maintenance import MaintenanceService
from menu_ranker.services.nutrition import NutritionService
from menu_ranker.services.ranking import RankingService
from menu_ranker.services.resolution import RestaurantResolver
from menu_ranker.services.restaurants import RestaurantRepository, RestaurantService


def food(name: str | None, calories: int, protein: float, carbs: float = 0) -> dict:
    """Build a catalog food entry the way the search API returns it."""
    entry: dict[str, object] = {
        "food_id": f"id-{name}",
        "food_description": (
            f"Per 1 serving - Calories: {calories}kcal | Fat: 1.00g | "
            f"Carbs: {carbs}g | Protein: {protein}g"
        ),
    }
    if name is not None:
        entry["food_name"] = name
    return entry


def item(name: str | None, calories: float, protein: float, carbs: float = 0.0):
    return MenuItem(name=name, calories=calories, protein_g=protein, carbs_g=carbs)


@dataclass
class InMemoryRestaurantRepository(RestaurantRepository):
    """In-memory restaurant repository for tests."""

    records: dict[str, RestaurantRecord] = field(default_factory=dict)
    fail_writes: bool = False
    fail_reads: bool = False

    def add(
        self,
        name: str,
        menu: Sequence[MenuItem],
        last_updated: datetime | None = None,
    ) -> None:
        self.records[name] = RestaurantRecord(
            name=name, last_updated=last_updated, menu=tuple(menu)
        )

    def get_restaurant(self, name: str) -> RestaurantRecord | None:
        self._check_read()
        return self.records.get(name)

    def create_restaurant(
        self, name: str, menu: Sequence[MenuItem], updated_at: datetime
    ) -> RestaurantRecord:
        self._check_write()
        record = RestaurantRecord(name=name, last_updated=updated_at, menu=tuple(menu))
        self.records[name] = record
        return record

    def save_menu(
        self, name: str, menu: Sequence[MenuItem], updated_at: datetime | None
    ) -> None:
        self._check_write()
        self.records[name] = RestaurantRecord(
            name=name, last_updated=updated_at, menu=tuple(menu)
        )

    def list_restaurants(self, names: Sequence[str]) -> list[RestaurantRecord]:
        self._check_read()
        return [record for name, record in self.records.items() if name in names]

    def search_restaurants(self, query: str, limit: int) -> list[RestaurantRecord]:
        self._check_read()
        query_lower = query.lower()
        return [
            record
            for record in self.records.values()
            if query_lower in record.name.lower()
        ][:limit]

    def list_all_restaurants(self) -> list[RestaurantRecord]:
        self._check_read()
        return list(self.records.values())

    def delete_restaurant(self, name: str) -> None:
        self._check_write()
        self.records.pop(name, None)

    def _check_read(self) -> None:
        if self.fail_reads:
            raise RuntimeError("store unavailable")

    def _check_write(self) -> None:
        if self.fail_writes:
            raise RuntimeError("store unavailable")


@dataclass
class FakeCredentialProvider(CredentialProvider):
    """Credential provider returning a fixed token."""

    token: str | None = "test-token"
    invalidations: int = 0

    async def get_token(self) -> str | None:
        return self.token

    def invalidate(self) -> None:
        self.invalidations += 1


@dataclass
class FakeFatSecretClient(FatSecretClient):
    """Fake catalog client answering from a term-to-foods map."""

    foods_by_term: dict[str, list[dict]] = field(default_factory=dict)
    failing_terms: set[str] = field(default_factory=set)
    gates: dict[str, asyncio.Event] = field(default_factory=dict)
    calls: list[str] = field(default_factory=list)
    in_flight: int = 0
    max_in_flight: int = 0

    async def search_foods(
        self, query: str, token: str, max_results: int = 50
    ) -> dict[str, object]:
        self.calls.append(query)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(0)
            if query in self.gates:
                await self.gates[query].wait()
            if query in self.failing_terms:
                raise RuntimeError(f"search failed for {query}")
            foods = self.foods_by_term.get(query)
            if not foods:
                return {"foods": {"max_results": "50", "total_results": "0"}}
            return {"foods": {"food": foods, "total_results": str(len(foods))}}
        finally:
            self.in_flight -= 1


@pytest.fixture
def settings() -> Settings:
    return Settings(
        fatsecret_client_id="client-id",
        fatsecret_client_secret="client-secret",
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
        google_maps_key="maps-key",
        environment="test",
    )


@pytest.fixture
def repository() -> InMemoryRestaurantRepository:
    return InMemoryRestaurantRepository()


@pytest.fixture
def fatsecret_client() -> FakeFatSecretClient:
    return FakeFatSecretClient()


@pytest.fixture
def credentials() -> FakeCredentialProvider:
    return FakeCredentialProvider()


@pytest.fixture
def nutrition_service(
    fatsecret_client: FakeFatSecretClient, credentials: FakeCredentialProvider
) -> NutritionService:
    return NutritionService(client=fatsecret_client, credentials=credentials)


@pytest.fixture
def restaurant_service(
    repository: InMemoryRestaurantRepository, nutrition_service: NutritionService
) -> RestaurantService:
    return RestaurantService(
        repository=repository,
        resolver=RestaurantResolver(nutrition_service),
    )


@pytest.fixture
def container(
    settings: Settings,
    repository: InMemoryRestaurantRepository,
    nutrition_service: NutritionService,
    restaurant_service: RestaurantService,
) -> AppContainer:
    ranking_service = RankingService(
        repository=repository,
        restaurant_service=restaurant_service,
        default_limit=settings.default_rank_limit,
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        nutrition_service=nutrition_service,
        restaurant_service=restaurant_service,
        ranking_service=ranking_service,
        maintenance_service=MaintenanceService(repository),
        close_resources=close_resources,
    )
