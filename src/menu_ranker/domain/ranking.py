"""Health scoring and restaurant ranking."""

from collections.abc import Collection, Iterable
from dataclasses import dataclass

from menu_ranker.domain.menu import MenuItem, RestaurantRecord


@dataclass(frozen=True)
class ScoredItem:
    """Menu item paired with its health score."""

    item: MenuItem
    score: float


@dataclass(frozen=True)
class RankedRestaurant:
    """Restaurant with its top-scoring menu items."""

    name: str
    menu: tuple[ScoredItem, ...]
    best_score: float


def health_score(item: MenuItem) -> float:
    """Return protein grams per calorie, or 0 when calories are not positive."""
    if item.calories <= 0 or item.protein_g <= 0:
        return 0.0
    return item.protein_g / item.calories


def rank_restaurants(
    records: Iterable[RestaurantRecord],
    names: Collection[str],
    limit: int,
) -> list[RankedRestaurant]:
    """Rank restaurants by their best menu item.

    Items are ordered by descending score inside each restaurant and capped to
    ``limit``. Ties keep the stored order.
    """
    ranked = []
    for record in records:
        if record.name not in names or not record.menu:
            continue
        scored = sorted(
            (ScoredItem(item=item, score=health_score(item)) for item in record.menu),
            key=lambda entry: entry.score,
            reverse=True,
        )
        ranked.append(
            RankedRestaurant(
                name=record.name,
                menu=tuple(scored[:limit]),
                best_score=scored[0].score,
            )
        )
    return sorted(ranked, key=lambda restaurant: restaurant.best_score, reverse=True)
