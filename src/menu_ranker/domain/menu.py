"""Restaurant menu domain models."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class MenuItem:
    """A single menu item with its nutrition figures."""

    name: str | None
    calories: float
    protein_g: float
    carbs_g: float


@dataclass(frozen=True)
class RestaurantRecord:
    """Stored restaurant with its accumulated menu."""

    name: str
    last_updated: datetime | None
    menu: tuple[MenuItem, ...]


@dataclass(frozen=True)
class MergeResult:
    """Outcome of merging fetched items into a stored menu."""

    restaurant: str
    created: bool
    items_added: int
    menu_size: int


@dataclass(frozen=True)
class SweepResult:
    """Counts reported by a maintenance sweep."""

    items_removed: int
    restaurants_removed: int
