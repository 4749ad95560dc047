"""Domain models for recipe nutrition."""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from uuid import UUID

from nutriscan.domain.nutrients import NutrientTotals


class IngredientUnit(StrEnum):
    """Unit an ingredient amount was entered in."""

    GRAMS = "grams"
    QUANTITY = "quantity"
    LITERS = "liters"


@dataclass(frozen=True)
class Ingredient:
    """An ingredient line of a recipe.

    ``name`` may be ``None`` when the caller sent a malformed entry; such
    entries are reported as failed instead of raising.
    """

    name: str | None
    amount: float
    unit: IngredientUnit = IngredientUnit.GRAMS

    def to_dict(self) -> dict[str, object]:
        return {"name": self.name, "amount": self.amount, "unit": self.unit.value}


@dataclass(frozen=True)
class IngredientContribution:
    """Resolved nutrition contributed by one ingredient line."""

    name: str
    amount: float
    unit: IngredientUnit
    nutrients: NutrientTotals

    def to_dict(self) -> dict[str, object]:
        return {
            "name": self.name,
            "amount": self.amount,
            "unit": self.unit.value,
            **self.nutrients.to_dict(),
        }


@dataclass(frozen=True)
class RecipeResult:
    """Totals, per-serving values and the ingredient breakdown for a recipe."""

    total: NutrientTotals
    per_serving: NutrientTotals
    breakdown: list[IngredientContribution]
    failed_ingredients: list[str]

    def to_dict(self) -> dict[str, object]:
        return {
            "total": self.total.to_dict(),
            "perServing": self.per_serving.to_dict(),
            "breakdown": [item.to_dict() for item in self.breakdown],
            "failedIngredients": list(self.failed_ingredients),
        }


@dataclass(frozen=True)
class SavedRecipe:
    """A recipe a user saved together with its calculated nutrition."""

    name: str
    ingredients: list[Ingredient]
    servings: int
    nutrition: RecipeResult
    id: UUID | None = None
    created_at: datetime | None = None

    def to_dict(self) -> dict[str, object]:
        return {
            "id": str(self.id) if self.id else None,
            "name": self.name,
            "ingredients": [item.to_dict() for item in self.ingredients],
            "servings": self.servings,
            "nutrition": self.nutrition.to_dict(),
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }
