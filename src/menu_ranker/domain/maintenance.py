"""Rules for detecting malformed stored menu data."""

from menu_ranker.domain.menu import MenuItem

PLACEHOLDER_NAMES = frozenset({"undefined", "null", "none", "n/a"})


def is_malformed(item: MenuItem) -> bool:
    """Return true when an item has no usable name."""
    if not isinstance(item.name, str):
        return True
    cleaned = item.name.strip()
    return not cleaned or cleaned.lower() in PLACEHOLDER_NAMES
