"""Ingredient reference nutrition catalog."""

import logging
import threading
from collections.abc import Mapping
from types import MappingProxyType

from nutriscan.domain.nutrients import NutrientTotals

_logger = logging.getLogger(__name__)


def _per_100g(  # noqa: PLR0913
    protein: float,
    carbs: float,
    fat: float,
    sugar: float,
    sodium: float,
    calories: float,
) -> NutrientTotals:
    return NutrientTotals(
        calories=calories,
        protein_g=protein,
        carbs_g=carbs,
        fat_g=fat,
        sugar_g=sugar,
        sodium_mg=sodium,
    )


# Values per 100 g: protein, carbs, fat, sugar (g), sodium (mg), calories.
# Order matters for partial matches: earlier entries win.
REFERENCE_NUTRITION: Mapping[str, NutrientTotals] = MappingProxyType(
    {
        # Grains
        "rice": _per_100g(6.6, 78, 0.3, 0.1, 10, 345),
        "wheat": _per_100g(13.7, 71, 1.7, 0.4, 2, 364),
        "basmati rice": _per_100g(6.3, 80, 0.3, 0, 1, 350),
        "oats": _per_100g(10.7, 66.3, 6.9, 0, 30, 389),
        # Proteins
        "chicken breast": _per_100g(31, 0, 3.6, 0, 75, 165),
        "chicken": _per_100g(26.3, 0, 7.4, 0, 75, 165),
        "fish (salmon)": _per_100g(25.4, 0, 13.6, 0, 75, 208),
        "eggs": _per_100g(13, 1.1, 11, 1.1, 140, 155),
        "lentils (cooked)": _per_100g(9.0, 20, 0.4, 0.1, 2, 116),
        "paneer": _per_100g(23, 1.2, 25, 0, 400, 321),
        "greek yogurt": _per_100g(10.2, 3.6, 0.4, 3.3, 75, 59),
        # Vegetables
        "broccoli": _per_100g(2.8, 7, 0.4, 1.4, 64, 34),
        "carrots": _per_100g(0.9, 10, 0.2, 4.7, 69, 41),
        "spinach": _per_100g(2.7, 3.6, 0.4, 0.4, 79, 23),
        "tomato": _per_100g(0.9, 3.9, 0.2, 2.6, 12, 18),
        "onion": _per_100g(1.1, 9, 0.1, 4.2, 4, 40),
        "cucumber": _per_100g(0.7, 3.6, 0.1, 1.7, 2, 16),
        "bell pepper": _per_100g(1, 6, 0.3, 3.2, 2, 31),
        # Oils & fats
        "olive oil": _per_100g(0, 0, 100, 0, 2, 884),
        "coconut oil": _per_100g(0, 0, 100, 0, 0, 892),
        "butter": _per_100g(0.7, 0.1, 81.7, 0, 714, 717),
        # Dairy
        "milk": _per_100g(3.2, 4.8, 3.3, 4.8, 44, 61),
        "cheese": _per_100g(25, 1.3, 33, 0.7, 621, 402),
        # Spices & seasonings
        "salt": _per_100g(0, 0, 0, 0, 38758, 0),
        "black pepper": _per_100g(10.4, 64.8, 3.3, 0.6, 20, 251),
        "turmeric": _per_100g(7.8, 67.1, 3.5, 3.2, 38, 312),
        # Legumes
        "chickpeas": _per_100g(15.4, 27.4, 4.3, 0.7, 64, 210),
        "beans": _per_100g(8.7, 16.1, 0.4, 0.3, 3, 127),
    }
)


class IngredientCatalog:
    """Per-100 g reference nutrition keyed by lower-cased ingredient name.

    Each instance owns its table. Writes copy the table and publish the copy
    under a lock, so a reader holding a snapshot never sees a change
    mid-batch.
    """

    def __init__(self, entries: Mapping[object, NutrientTotals] | None = None) -> None:
        source = REFERENCE_NUTRITION if entries is None else entries
        self._lock = threading.Lock()
        self._entries: Mapping[object, NutrientTotals] = MappingProxyType(
            {_normalize_key(key): value for key, value in source.items()}
        )

    def __len__(self) -> int:
        return len(self._entries)

    def lookup(self, name: object) -> NutrientTotals | None:
        """Return reference nutrition for ``name``, or None when nothing matches.

        An exact case-insensitive match wins. Otherwise the first entry, in
        table order, whose key contains the query or is contained in it.
        """
        if not isinstance(name, str) or not name.strip():
            _logger.warning("Invalid ingredient name: %r", name)
            return None
        normalized = name.strip().lower()
        entries = self._entries
        exact = entries.get(normalized)
        if exact is not None:
            return exact
        for key, value in entries.items():
            if not isinstance(key, str) or not key:
                continue
            if normalized in key or key in normalized:
                return value
        return None

    def add(self, name: str, nutrition: NutrientTotals) -> None:
        """Insert or overwrite an entry; affects all later lookups."""
        if not isinstance(name, str) or not name.strip():
            raise ValueError("Ingredient name cannot be empty")
        key = name.strip().lower()
        with self._lock:
            updated = dict(self._entries)
            updated[key] = nutrition
            self._entries = MappingProxyType(updated)
        _logger.info("Added custom ingredient: %s", key)

    def names(self) -> list[str]:
        """Return the known ingredient names in table order."""
        return [key for key in self._entries if isinstance(key, str) and key]

    def snapshot(self) -> "IngredientCatalog":
        """Return an independent catalog frozen at the current contents."""
        return IngredientCatalog(self._entries)


def _normalize_key(key: object) -> object:
    if isinstance(key, str):
        return key.strip().lower()
    return key
