"""Maintenance sweep for malformed stored menus."""

import logging
from dataclasses import dataclass

from menu_ranker.domain.maintenance import is_malformed
from menu_ranker.domain.menu import SweepResult
from menu_ranker.services.restaurants import RestaurantRepository

_logger = logging.getLogger(__name__)


@dataclass
class MaintenanceService:
    """Removes unnamed menu items and restaurants left without a menu."""

    repository: RestaurantRepository

    def sweep(self) -> SweepResult:
        """Run the sweep and report how much was removed."""
        items_removed = 0
        restaurants_removed = 0
        for record in self.repository.list_all_restaurants():
            kept = [item for item in record.menu if not is_malformed(item)]
            removed = len(record.menu) - len(kept)
            if not kept:
                self.repository.delete_restaurant(record.name)
                restaurants_removed += 1
            elif removed:
                self.repository.save_menu(record.name, kept, record.last_updated)
            items_removed += removed

        _logger.info(
            "Sweep removed %s items and %s restaurants",
            items_removed,
            restaurants_removed,
        )
        return SweepResult(
            items_removed=items_removed, restaurants_removed=restaurants_removed
        )
