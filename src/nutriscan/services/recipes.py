"""Recipe nutrition aggregation and saved recipes."""

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID

from nutriscan.domain.errors import RecipeError
from nutriscan.domain.nutrients import ZERO_TOTALS, NutrientTotals
from nutriscan.domain.recipes import (
    Ingredient,
    IngredientContribution,
    IngredientUnit,
    RecipeResult,
    SavedRecipe,
)
from nutriscan.services.catalog import IngredientCatalog

_REFERENCE_AMOUNT = 100.0
_UNKNOWN_INGREDIENT = "Unknown"

_logger = logging.getLogger(__name__)


@dataclass
class RecipeCalculator:
    """Aggregates recipe nutrition from a reference catalog."""

    catalog: IngredientCatalog

    def calculate(
        self, ingredients: Sequence[Ingredient], servings: float = 1
    ) -> RecipeResult:
        """Sum ingredient nutrition and divide it into servings.

        Every amount is scaled by ``amount / 100`` whatever its unit.
        Ingredients missing from the catalog are listed in
        ``failed_ingredients`` and contribute nothing.
        """
        if not ingredients:
            raise RecipeError("Ingredients array cannot be empty")
        if not math.isfinite(servings) or servings <= 0:
            raise RecipeError("Servings must be greater than 0")

        catalog = self.catalog.snapshot()
        breakdown: list[IngredientContribution] = []
        failed: list[str] = []
        total = ZERO_TOTALS
        for ingredient in ingredients:
            name = ingredient.name
            if not isinstance(name, str) or not name.strip():
                _logger.warning("Invalid ingredient entry: %r", ingredient)
                failed.append(str(name) if name else _UNKNOWN_INGREDIENT)
                continue
            reference = catalog.lookup(name)
            if reference is None:
                _logger.warning("Skipping ingredient not in catalog: %s", name)
                failed.append(name)
                continue
            if ingredient.unit is not IngredientUnit.GRAMS:
                _logger.warning(
                    "Ingredient %s given in %s, scaling as grams",
                    name,
                    ingredient.unit,
                )
            contribution = _contribution(ingredient, name, reference)
            breakdown.append(contribution)
            total = total + contribution.nutrients

        return RecipeResult(
            total=total.rounded(),
            per_serving=total.scaled(1 / servings).rounded(),
            breakdown=breakdown,
            failed_ingredients=failed,
        )

    def lookup_ingredient(self, name: str) -> NutrientTotals | None:
        """Return per-100 g reference nutrition for an ingredient name."""
        return self.catalog.lookup(name)

    def get_available_ingredients(self) -> list[str]:
        """Return known ingredient names for autocomplete."""
        return self.catalog.names()

    def add_custom_ingredient(self, name: str, nutrition: NutrientTotals) -> None:
        """Add or replace a per-100 g catalog entry."""
        self.catalog.add(name, nutrition)


def _contribution(
    ingredient: Ingredient, name: str, reference: NutrientTotals
) -> IngredientContribution:
    ratio = ingredient.amount / _REFERENCE_AMOUNT
    return IngredientContribution(
        name=name,
        amount=ingredient.amount,
        unit=ingredient.unit,
        nutrients=reference.scaled(ratio),
    )


class RecipeRepository(Protocol):
    """Persistence interface for saved recipes."""

    def create_recipe(self, user_id: UUID, recipe: SavedRecipe) -> SavedRecipe:
        """Persist a recipe and return it with its id."""

    def list_recipes(self, user_id: UUID) -> list[SavedRecipe]:
        """Return a user's recipes, newest first."""

    def get_recipe(self, user_id: UUID, recipe_id: UUID) -> SavedRecipe | None:
        """Return a recipe by id, if present."""

    def delete_recipe(self, user_id: UUID, recipe_id: UUID) -> None:
        """Delete a recipe."""


@dataclass
class RecipeService:
    """Application service for calculating and saving recipes."""

    calculator: RecipeCalculator
    repository: RecipeRepository

    def save_recipe(
        self,
        user_id: UUID,
        name: str,
        ingredients: Sequence[Ingredient],
        servings: int = 1,
    ) -> SavedRecipe:
        """Calculate nutrition for a recipe and persist it."""
        nutrition = self.calculator.calculate(ingredients, servings)
        recipe = SavedRecipe(
            name=name,
            ingredients=list(ingredients),
            servings=servings,
            nutrition=nutrition,
            created_at=datetime.now(tz=UTC),
        )
        return self.repository.create_recipe(user_id, recipe)

    def list_recipes(self, user_id: UUID) -> list[SavedRecipe]:
        """Return saved recipes, newest first."""
        return sorted(
            self.repository.list_recipes(user_id),
            key=lambda recipe: recipe.created_at or datetime.min.replace(tzinfo=UTC),
            reverse=True,
        )

    def get_recipe(self, user_id: UUID, recipe_id: UUID) -> SavedRecipe | None:
        return self.repository.get_recipe(user_id, recipe_id)

    def delete_recipe(self, user_id: UUID, recipe_id: UUID) -> None:
        self.repository.delete_recipe(user_id, recipe_id)
