"""Nutrition search service backed by the FatSecret food catalog."""

import logging
from dataclasses import dataclass

import httpx

from menu_ranker.adapters.fatsecret_auth import CredentialProvider
from menu_ranker.adapters.fatsecret_client import FatSecretClient
from menu_ranker.domain.menu import MenuItem
from menu_ranker.domain.nutrition import has_calorie_figure, parse_nutrients

_logger = logging.getLogger(__name__)


@dataclass
class NutritionService:
    """Keyword search returning calorie-bearing menu items.

    Failures of any kind are reported as an empty result so a single bad
    lookup never aborts a batch.
    """

    client: FatSecretClient
    credentials: CredentialProvider
    max_results: int = 50

    async def search(self, term: str) -> list[MenuItem]:
        """Search the catalog and return items with a recognizable calorie value."""
        token = await self.credentials.get_token()
        if token is None:
            _logger.warning("Nutrition search skipped, no credential: term=%s", term)
            return []

        try:
            payload = await self.client.search_foods(
                term, token, max_results=self.max_results
            )
        except Exception as exc:
            status_code = _status_code_from_exception(exc)
            if status_code == "401":
                self.credentials.invalidate()
            _logger.warning(
                "Nutrition search failed (term=%s, status=%s): %s",
                term,
                status_code,
                exc,
            )
            return []

        if not isinstance(payload, dict):
            _logger.warning("Nutrition search returned malformed data: term=%s", term)
            return []
        error = payload.get("error")
        if error:
            _logger.warning(
                "Nutrition search rejected (term=%s): %s", term, _error_message(error)
            )
            return []

        items = [
            _to_menu_item(food)
            for food in _extract_foods(payload)
            if has_calorie_figure(food.get("food_description"))
        ]
        _logger.debug("Nutrition search: term=%s results=%s", term, len(items))
        return items


def _extract_foods(payload: dict[str, object]) -> list[dict[str, object]]:
    """Return the food entries, which the API sends as an object or a list."""
    foods = payload.get("foods")
    if not isinstance(foods, dict):
        return []
    food = foods.get("food")
    if isinstance(food, dict):
        return [food]
    if isinstance(food, list):
        return [entry for entry in food if isinstance(entry, dict)]
    return []


def _to_menu_item(food: dict[str, object]) -> MenuItem:
    facts = parse_nutrients(food.get("food_description"))
    name = food.get("food_name")
    return MenuItem(
        name=name if isinstance(name, str) else None,
        calories=facts.calories,
        protein_g=facts.protein_g,
        carbs_g=facts.carbs_g,
    )


def _error_message(error: object) -> str:
    if isinstance(error, dict):
        return str(error.get("message", error))
    return str(error)


def _status_code_from_exception(exc: Exception) -> str:
    """Extract HTTP status code from an exception, if available."""
    if isinstance(exc, httpx.HTTPStatusError):
        return str(exc.response.status_code)
    return "n/a"
