"""Ranking queries over stored restaurant menus."""

from collections.abc import Sequence
from dataclasses import dataclass

from menu_ranker.domain.ranking import RankedRestaurant, rank_restaurants
from menu_ranker.services.restaurants import RestaurantRepository, RestaurantService


@dataclass
class RankingService:
    """Service producing health-score rankings."""

    repository: RestaurantRepository
    restaurant_service: RestaurantService
    default_limit: int = 50

    def rank(
        self, names: Sequence[str], limit: int | None = None
    ) -> list[RankedRestaurant]:
        """Rank stored restaurants named in ``names`` without fetching."""
        unique = list(dict.fromkeys(names))
        if not unique:
            return []
        records = self.repository.list_restaurants(unique)
        return rank_restaurants(records, set(unique), limit or self.default_limit)

    async def refresh_and_rank(
        self, names: Sequence[str], limit: int | None = None
    ) -> list[RankedRestaurant]:
        """Bring stale restaurants up to date, then rank what is stored."""
        await self.restaurant_service.refresh_many(names)
        return self.rank(names, limit)
