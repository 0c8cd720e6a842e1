"""Supabase implementation for restaurant menus.

Each restaurant is one row of the ``restaurants`` table keyed by ``name``. The
menu lives in the ``servings`` jsonb column as a list of objects with
``food_name``, ``calories``, ``protein`` and ``carbohydrate`` keys.
"""

import math
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from menu_ranker.domain.menu import MenuItem, RestaurantRecord
from menu_ranker.services.restaurants import RestaurantRepository

_TABLE = "restaurants"


@dataclass
class SupabaseRestaurantRepository(RestaurantRepository):
    """Supabase-backed repository for restaurant menus."""

    client: Client

    def get_restaurant(self, name: str) -> RestaurantRecord | None:
        """Return a restaurant by name, if present."""
        response = (
            self.client.table(_TABLE).select("*").eq("name", name).limit(1).execute()
        )
        if not response.data:
            return None
        return parse_restaurant(response.data[0])

    def create_restaurant(
        self, name: str, menu: Sequence[MenuItem], updated_at: datetime
    ) -> RestaurantRecord:
        """Create a restaurant row and return it."""
        response = (
            self.client.table(_TABLE)
            .insert(
                {
                    "name": name,
                    "last_updated": updated_at.isoformat(),
                    "servings": [serialize_item(item) for item in menu],
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create restaurant")
        return parse_restaurant(response.data[0])

    def save_menu(
        self, name: str, menu: Sequence[MenuItem], updated_at: datetime | None
    ) -> None:
        """Replace the stored menu of a restaurant."""
        self.client.table(_TABLE).update(
            {
                "last_updated": updated_at.isoformat() if updated_at else None,
                "servings": [serialize_item(item) for item in menu],
            }
        ).eq("name", name).execute()

    def list_restaurants(self, names: Sequence[str]) -> list[RestaurantRecord]:
        """Return restaurants whose name is in ``names``."""
        if not names:
            return []
        response = (
            self.client.table(_TABLE).select("*").in_("name", list(names)).execute()
        )
        return [parse_restaurant(row) for row in response.data or []]

    def search_restaurants(self, query: str, limit: int) -> list[RestaurantRecord]:
        """Return restaurants whose name contains ``query``, ignoring case."""
        response = (
            self.client.table(_TABLE)
            .select("*")
            .ilike("name", f"%{_escape_like(query)}%")
            .order("name")
            .limit(limit)
            .execute()
        )
        needle = query.lower()
        records = [parse_restaurant(row) for row in response.data or []]
        return [record for record in records if needle in record.name.lower()]

    def list_all_restaurants(self) -> list[RestaurantRecord]:
        """Return every stored restaurant."""
        response = self.client.table(_TABLE).select("*").execute()
        return [parse_restaurant(row) for row in response.data or []]

    def delete_restaurant(self, name: str) -> None:
        """Delete a restaurant row."""
        self.client.table(_TABLE).delete().eq("name", name).execute()


def serialize_item(item: MenuItem) -> dict[str, object]:
    """Convert a menu item into its stored document shape."""
    return {
        "food_name": item.name,
        "calories": item.calories,
        "protein": item.protein_g,
        "carbohydrate": item.carbs_g,
    }


def parse_restaurant(row: dict[str, object]) -> RestaurantRecord:
    """Parse a restaurant row into a domain model."""
    servings = row.get("servings")
    return RestaurantRecord(
        name=str(row["name"]),
        last_updated=_parse_timestamp(row.get("last_updated")),
        menu=tuple(
            _parse_item(entry)
            for entry in (servings if isinstance(servings, list) else [])
            if isinstance(entry, dict)
        ),
    )


def _parse_item(entry: dict[str, object]) -> MenuItem:
    name = entry.get("food_name")
    return MenuItem(
        name=name if isinstance(name, str) else None,
        calories=_as_float(entry.get("calories")),
        protein_g=_as_float(entry.get("protein")),
        carbs_g=_as_float(entry.get("carbohydrate")),
    )


def _as_float(value: object) -> float:
    """Return a finite, non-negative number, or 0 for anything else."""
    try:
        number = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(number) or number < 0:
        return 0.0
    return number


def _parse_timestamp(raw: object) -> datetime | None:
    if not isinstance(raw, str) or not raw:
        return None
    parsed = datetime.fromisoformat(raw)
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed


def _escape_like(query: str) -> str:
    # PostgREST turns every "*" into "%" and has no escape for it, so a
    # literal asterisk is sent as the single-character wildcard instead.
    escaped = query.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return escaped.replace("*", "_")
