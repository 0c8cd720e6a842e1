"""Parsing of free-text nutrient descriptions.

The food catalog returns a summary string per food such as
``"Per 1 burger - Calories: 250kcal | Fat: 9.00g | Carbs: 30.00g | Protein: 12.00g"``.
The format is not a documented contract, so parsing is kept tolerant: any
figure that cannot be found is reported as zero.
"""

import re
from dataclasses import dataclass

_CALORIES_PATTERN = re.compile(r"Calories:\s*(\d+)", re.IGNORECASE)
_PROTEIN_PATTERN = re.compile(r"Protein:\s*(\d+(?:\.\d+)?)", re.IGNORECASE)
_CARBS_PATTERN = re.compile(r"Carbs:\s*(\d+(?:\.\d+)?)", re.IGNORECASE)


@dataclass(frozen=True)
class NutrientFacts:
    """Figures extracted from a food description."""

    calories: float
    protein_g: float
    carbs_g: float


def has_calorie_figure(description: object) -> bool:
    """Return true when the description carries a numeric calorie value."""
    if not isinstance(description, str):
        return False
    return _CALORIES_PATTERN.search(description) is not None


def parse_nutrients(description: object) -> NutrientFacts:
    """Extract calories, protein and carbs, defaulting missing fields to 0."""
    if not isinstance(description, str) or not description:
        return NutrientFacts(calories=0.0, protein_g=0.0, carbs_g=0.0)
    return NutrientFacts(
        calories=_match_number(_CALORIES_PATTERN, description),
        protein_g=_match_number(_PROTEIN_PATTERN, description),
        carbs_g=_match_number(_CARBS_PATTERN, description),
    )


def _match_number(pattern: re.Pattern[str], text: str) -> float:
    match = pattern.search(text)
    if match is None:
        return 0.0
    return float(match.group(1))
