"""Services for fetching and merging restaurant menus."""

import asyncio
import logging
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from typing import Protocol

from menu_ranker.domain.menu import MenuItem, MergeResult, RestaurantRecord
from menu_ranker.services.locks import KeyedLock
from menu_ranker.services.resolution import RestaurantResolver

_logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


class RestaurantRepository(Protocol):
    """Persistence interface for restaurant menus."""

    def get_restaurant(self, name: str) -> RestaurantRecord | None:
        """Return a restaurant by name, if present."""

    def create_restaurant(
        self, name: str, menu: Sequence[MenuItem], updated_at: datetime
    ) -> RestaurantRecord:
        """Create a restaurant with an initial menu and return it."""

    def save_menu(
        self, name: str, menu: Sequence[MenuItem], updated_at: datetime | None
    ) -> None:
        """Replace the stored menu and timestamp of a restaurant."""

    def list_restaurants(self, names: Sequence[str]) -> list[RestaurantRecord]:
        """Return restaurants whose name is in ``names``."""

    def search_restaurants(self, query: str, limit: int) -> list[RestaurantRecord]:
        """Return restaurants whose name contains ``query``, ignoring case."""

    def list_all_restaurants(self) -> list[RestaurantRecord]:
        """Return every stored restaurant."""

    def delete_restaurant(self, name: str) -> None:
        """Delete a restaurant by name."""


@dataclass
class RestaurantService:
    """Application service for menu refresh and merge operations."""

    repository: RestaurantRepository
    resolver: RestaurantResolver
    chunk_size: int = 5
    freshness_seconds: int = 3600
    browse_limit: int = 50
    locks: KeyedLock = field(default_factory=KeyedLock)
    clock: Callable[[], datetime] = _utcnow

    async def upsert(self, name: str, items: Iterable[MenuItem]) -> MergeResult:
        """Append items whose name is not yet on the stored menu.

        Stored items are never modified. Merges for the same restaurant are
        serialized.
        """
        async with self.locks.hold(name):
            now = self.clock()
            existing = self.repository.get_restaurant(name)
            known = {item.name for item in existing.menu} if existing else set()
            new_items = _unique_new_items(items, known)

            if existing is None:
                if not new_items:
                    return MergeResult(
                        restaurant=name, created=False, items_added=0, menu_size=0
                    )
                self.repository.create_restaurant(name, new_items, updated_at=now)
                _logger.info("Stored %s with %s items", name, len(new_items))
                return MergeResult(
                    restaurant=name,
                    created=True,
                    items_added=len(new_items),
                    menu_size=len(new_items),
                )

            menu = [*existing.menu, *new_items]
            self.repository.save_menu(name, menu, updated_at=now)
            _logger.info("Updated %s with %s new items", name, len(new_items))
            return MergeResult(
                restaurant=name,
                created=False,
                items_added=len(new_items),
                menu_size=len(menu),
            )

    async def refresh(self, name: str) -> MergeResult | None:
        """Resolve a restaurant against the catalog and merge what was found."""
        resolved = await self.resolver.resolve(name)
        if resolved is None:
            return None
        return await self.upsert(name, resolved.items)

    async def refresh_many(
        self, names: Iterable[str], *, force: bool = False
    ) -> list[MergeResult]:
        """Refresh restaurants in fixed-size concurrent chunks.

        Chunks run one after another. Failures are logged and skipped.
        """
        unique = _dedupe(names)
        if not force:
            fresh = self._fresh_names(unique)
            unique = [name for name in unique if name not in fresh]

        results: list[MergeResult] = []
        size = max(self.chunk_size, 1)
        for start in range(0, len(unique), size):
            chunk = unique[start : start + size]
            outcomes = await asyncio.gather(
                *(self.refresh(name) for name in chunk), return_exceptions=True
            )
            for name, outcome in zip(chunk, outcomes, strict=True):
                if isinstance(outcome, BaseException):
                    _logger.error("Failed to refresh %s", name, exc_info=outcome)
                elif outcome is not None:
                    results.append(outcome)
        return results

    def browse(self, search: str | None = None) -> list[RestaurantRecord]:
        """Return stored restaurants whose name contains the search text."""
        return self.repository.search_restaurants(search or "", self.browse_limit)

    def _fresh_names(self, names: Sequence[str]) -> set[str]:
        if self.freshness_seconds <= 0 or not names:
            return set()
        cutoff = self.clock() - timedelta(seconds=self.freshness_seconds)
        return {
            record.name
            for record in self.repository.list_restaurants(names)
            if record.menu
            and record.last_updated is not None
            and record.last_updated > cutoff
        }


def _dedupe(names: Iterable[str]) -> list[str]:
    unique: list[str] = []
    for name in names:
        if name and name not in unique:
            unique.append(name)
    return unique


def _unique_new_items(
    items: Iterable[MenuItem], known: set[str | None]
) -> list[MenuItem]:
    """Return items whose name is neither known nor repeated in the batch."""
    seen = set(known)
    fresh = []
    for item in items:
        if item.name in seen:
            continue
        seen.add(item.name)
        fresh.append(item)
    return fresh
