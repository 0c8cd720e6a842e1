"""Resolve noisy place names to a catalog search that returns data."""

import logging
from dataclasses import dataclass
from typing import Protocol

from menu_ranker.domain.menu import MenuItem
from menu_ranker.domain.naming import candidate_terms

_logger = logging.getLogger(__name__)


class MenuSearch(Protocol):
    """Keyword search returning calorie-bearing menu items."""

    async def search(self, term: str) -> list[MenuItem]:
        """Return items found for a search term."""


@dataclass(frozen=True)
class ResolvedMenu:
    """Items found for a restaurant and the term that produced them."""

    restaurant: str
    term: str
    items: tuple[MenuItem, ...]


@dataclass
class RestaurantResolver:
    """Tries candidate terms in order and keeps the first that yields items."""

    nutrition: MenuSearch

    async def resolve(self, name: str) -> ResolvedMenu | None:
        """Return the first candidate's items, or None when none match."""
        for term in candidate_terms(name):
            items = await self.nutrition.search(term)
            if items:
                _logger.info("Resolved %s using %r (%s items)", name, term, len(items))
                return ResolvedMenu(restaurant=name, term=term, items=tuple(items))
        _logger.info("No usable nutrition data found for %s", name)
        return None
