"""Tests for the ingredient catalog."""

import pytest

from nutriscan.domain.nutrients import NutrientTotals
from nutriscan.services.catalog import REFERENCE_NUTRITION, IngredientCatalog

GHEE = NutrientTotals(calories=900, fat_g=99.5)


def test_reference_table_is_loaded(catalog: IngredientCatalog) -> None:
    assert len(catalog) == len(REFERENCE_NUTRITION) == 28
    assert catalog.names()[:3] == ["rice", "wheat", "basmati rice"]


def test_exact_match_is_case_insensitive(catalog: IngredientCatalog) -> None:
    assert catalog.lookup("  Chicken Breast ") == REFERENCE_NUTRITION["chicken breast"]


def test_exact_match_beats_earlier_partial(catalog: IngredientCatalog) -> None:
    # "chicken" also matches "chicken breast", which comes first in the table.
    assert catalog.lookup("chicken") == REFERENCE_NUTRITION["chicken"]


@pytest.mark.parametrize(
    ("query", "expected"),
    [
        ("grilled chicken", "chicken"),
        ("brown rice", "rice"),
        ("basmati", "basmati rice"),
        ("chick", "chicken breast"),
        ("egg", "eggs"),
        ("Salmon", "fish (salmon)"),
    ],
)
def test_partial_match_takes_first_in_table_order(
    catalog: IngredientCatalog, query: str, expected: str
) -> None:
    assert catalog.lookup(query) == REFERENCE_NUTRITION[expected]


@pytest.mark.parametrize("query", ["unicorn", "", "   ", None, 42])
def test_lookup_miss_returns_none(catalog: IngredientCatalog, query) -> None:
    assert catalog.lookup(query) is None


def test_add_overwrites_and_normalizes(catalog: IngredientCatalog) -> None:
    catalog.add(" Rice ", GHEE)

    assert catalog.lookup("rice") == GHEE
    assert len(catalog) == 28


def test_add_rejects_blank_name(catalog: IngredientCatalog) -> None:
    with pytest.raises(ValueError, match="cannot be empty"):
        catalog.add("  ", GHEE)


def test_instances_do_not_share_additions() -> None:
    first = IngredientCatalog()
    second = IngredientCatalog()

    first.add("Ghee", GHEE)

    assert first.lookup("ghee") == GHEE
    assert second.lookup("ghee") is None
    assert "ghee" not in REFERENCE_NUTRITION


def test_snapshot_is_unaffected_by_later_additions(
    catalog: IngredientCatalog,
) -> None:
    snapshot = catalog.snapshot()

    catalog.add("ghee", GHEE)

    assert snapshot.lookup("ghee") is None
    assert catalog.lookup("ghee") == GHEE


def test_names_skip_invalid_keys() -> None:
    catalog = IngredientCatalog({"rice": GHEE, 42: GHEE, "": GHEE})  # type: ignore[dict-item]

    assert catalog.names() == ["rice"]
    assert catalog.lookup("brown rice") == GHEE
