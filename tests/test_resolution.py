"""Tests for restaurant name resolution."""

import asyncio

from menu_ranker.services.nutrition import NutritionService
from menu_ranker.services.resolution import RestaurantResolver
from tests.conftest import FakeCredentialProvider, FakeFatSecretClient, food


def _resolver(client: FakeFatSecretClient) -> RestaurantResolver:
    return RestaurantResolver(NutritionService(client, FakeCredentialProvider()))


def test_resolution_stops_at_first_candidate_with_data() -> None:
    client = FakeFatSecretClient(
        foods_by_term={
            "McDonald's Store": [food("Big Mac", 590, 25)],
            "McDonalds Store #4521": [food("McChicken", 400, 14)],
        }
    )

    resolved = asyncio.run(_resolver(client).resolve("McDonald's Store #4521"))

    assert resolved is not None
    assert resolved.term == "McDonald's Store"
    assert [item.name for item in resolved.items] == ["Big Mac"]
    assert client.calls == ["McDonald's Store #4521", "McDonald's Store"]


def test_resolution_uses_full_name_when_it_matches() -> None:
    client = FakeFatSecretClient(
        foods_by_term={"Five Guys": [food("Little Burger", 540, 26)]}
    )

    resolved = asyncio.run(_resolver(client).resolve("Five Guys"))

    assert resolved is not None
    assert resolved.term == "Five Guys"
    assert client.calls == ["Five Guys"]


def test_resolution_skips_results_without_calories() -> None:
    client = FakeFatSecretClient(
        foods_by_term={
            "Culver's Dells": [{"food_name": "Butterburger", "food_description": ""}],
            "Culvers Dells": [food("ButterBurger", 390, 20)],
        }
    )

    resolved = asyncio.run(_resolver(client).resolve("Culver's Dells"))

    assert resolved is not None
    assert resolved.term == "Culvers Dells"


def test_resolution_continues_after_failed_candidate() -> None:
    client = FakeFatSecretClient(
        foods_by_term={"Raising Cane's": [food("Box Combo", 1500, 60)]},
        failing_terms={"Raising Cane's Chicken"},
    )

    resolved = asyncio.run(_resolver(client).resolve("Raising Cane's Chicken"))

    assert resolved is not None
    assert resolved.term == "Raising Cane's"


def test_resolution_returns_none_when_nothing_matches() -> None:
    client = FakeFatSecretClient()

    assert asyncio.run(_resolver(client).resolve("Corner Diner")) is None
    assert client.calls == ["Corner Diner"]
