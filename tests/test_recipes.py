"""Tests for recipe nutrition aggregation and saved recipes."""

from datetime import UTC, datetime, timedelta
from itertools import permutations
from uuid import uuid4

import pytest

from nutriscan.domain.errors import RecipeError
from nutriscan.domain.nutrients import NutrientTotals
from nutriscan.domain.recipes import Ingredient, IngredientUnit, SavedRecipe
from nutriscan.services.catalog import IngredientCatalog
from nutriscan.services.recipes import RecipeCalculator, RecipeService
from tests.conftest import InMemoryRecipeRepository


@pytest.fixture
def calculator(catalog: IngredientCatalog) -> RecipeCalculator:
    return RecipeCalculator(catalog)


def test_empty_ingredients_rejected(calculator: RecipeCalculator) -> None:
    with pytest.raises(RecipeError, match="Ingredients array cannot be empty"):
        calculator.calculate([], 2)


@pytest.mark.parametrize(
    "servings", [0, -1, float("nan"), float("inf"), float("-inf")]
)
def test_invalid_servings_rejected(
    calculator: RecipeCalculator, servings: float
) -> None:
    with pytest.raises(RecipeError, match="Servings must be greater than 0"):
        calculator.calculate([Ingredient("rice", 100)], servings)


def test_totals_and_per_serving(calculator: RecipeCalculator) -> None:
    result = calculator.calculate(
        [Ingredient("chicken breast", 150), Ingredient("basmati rice", 200)], 2
    )

    assert result.total.calories == 948
    assert result.total.carbs_g == 160.0
    assert result.total.sodium_mg == 114.5
    assert result.total.protein_g == pytest.approx(59.1)
    assert result.per_serving.calories == 474
    assert result.per_serving.carbs_g == 80.0
    assert result.per_serving.sodium_mg == 57.3
    assert result.failed_ingredients == []


def test_breakdown_follows_input_order(calculator: RecipeCalculator) -> None:
    result = calculator.calculate(
        [Ingredient("Spinach", 50), Ingredient("olive oil", 10), Ingredient("onion", 80)]
    )

    assert [item.name for item in result.breakdown] == ["Spinach", "olive oil", "onion"]
    assert result.breakdown[1].nutrients.fat_g == pytest.approx(10)
    assert result.breakdown[0].to_dict()["unit"] == "grams"


def test_unknown_ingredients_are_reported_and_contribute_nothing(
    calculator: RecipeCalculator,
) -> None:
    with_unknown = calculator.calculate(
        [Ingredient("rice", 100), Ingredient("unicorn", 500), Ingredient(None, 10)]
    )
    without_unknown = calculator.calculate([Ingredient("rice", 100)])

    assert with_unknown.failed_ingredients == ["unicorn", "Unknown"]
    assert with_unknown.total == without_unknown.total
    assert len(with_unknown.breakdown) == 1


def test_non_string_ingredient_name_reported_as_text(
    calculator: RecipeCalculator,
) -> None:
    result = calculator.calculate(
        [Ingredient(123, 10), Ingredient("rice", 100)]  # type: ignore[arg-type]
    )

    assert result.failed_ingredients == ["123"]
    assert result.to_dict()["failedIngredients"] == ["123"]


def test_all_unknown_gives_zero_totals(calculator: RecipeCalculator) -> None:
    result = calculator.calculate([Ingredient("unicorn", 100)], 4)

    assert result.total == NutrientTotals()
    assert result.per_serving == NutrientTotals()
    assert result.failed_ingredients == ["unicorn"]


def test_total_is_independent_of_ingredient_order(
    calculator: RecipeCalculator,
) -> None:
    ingredients = [
        Ingredient("oats", 80),
        Ingredient("milk", 200),
        Ingredient("greek yogurt", 100),
    ]

    totals = {
        calculator.calculate(list(order), 2).total for order in permutations(ingredients)
    }

    assert len(totals) == 1


def test_non_gram_units_are_scaled_as_grams(calculator: RecipeCalculator) -> None:
    result = calculator.calculate([Ingredient("milk", 250, IngredientUnit.LITERS)])

    assert result.total.calories == 153
    assert result.breakdown[0].unit is IngredientUnit.LITERS


def test_custom_ingredient_used_by_later_calculations(
    calculator: RecipeCalculator,
) -> None:
    calculator.add_custom_ingredient("Ghee", NutrientTotals(calories=900, fat_g=99))

    result = calculator.calculate([Ingredient("ghee", 10)])

    assert result.total.calories == 90
    assert result.total.fat_g == 9.9
    assert "ghee" in calculator.get_available_ingredients()
    assert calculator.lookup_ingredient("GHEE") is not None


def test_result_serializes_camel_case(calculator: RecipeCalculator) -> None:
    payload = calculator.calculate([Ingredient("tomato", 100)]).to_dict()

    assert payload["perServing"]["calories"] == 18
    assert payload["failedIngredients"] == []
    assert payload["breakdown"][0]["name"] == "tomato"


def test_save_recipe_stores_calculated_nutrition(
    calculator: RecipeCalculator,
) -> None:
    repository = InMemoryRecipeRepository()
    service = RecipeService(calculator=calculator, repository=repository)
    user_id = uuid4()

    saved = service.save_recipe(
        user_id, "Rice bowl", [Ingredient("rice", 200), Ingredient("broccoli", 100)], 2
    )

    assert saved.id is not None
    assert saved.nutrition.total.calories == 724
    assert service.get_recipe(user_id, saved.id) == saved
    assert service.get_recipe(uuid4(), saved.id) is None


def test_save_recipe_propagates_validation_errors(
    calculator: RecipeCalculator,
) -> None:
    service = RecipeService(
        calculator=calculator, repository=InMemoryRecipeRepository()
    )

    with pytest.raises(RecipeError):
        service.save_recipe(uuid4(), "Nothing", [], 1)


def test_list_recipes_newest_first(calculator: RecipeCalculator) -> None:
    repository = InMemoryRecipeRepository()
    service = RecipeService(calculator=calculator, repository=repository)
    user_id = uuid4()
    nutrition = calculator.calculate([Ingredient("rice", 100)])
    now = datetime.now(tz=UTC)
    for name, age in [("old", 2), ("new", 0), ("middle", 1)]:
        repository.create_recipe(
            user_id,
            SavedRecipe(
                name=name,
                ingredients=[Ingredient("rice", 100)],
                servings=1,
                nutrition=nutrition,
                created_at=now - timedelta(days=age),
            ),
        )

    names = [recipe.name for recipe in service.list_recipes(user_id)]

    assert names == ["new", "middle", "old"]


def test_delete_recipe(calculator: RecipeCalculator) -> None:
    service = RecipeService(
        calculator=calculator, repository=InMemoryRecipeRepository()
    )
    user_id = uuid4()
    saved = service.save_recipe(user_id, "Salad", [Ingredient("cucumber", 100)])

    service.delete_recipe(user_id, saved.id)

    assert service.list_recipes(user_id) == []
