"""Supabase repository for saved recipes."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from nutriscan.domain.nutrients import NutrientTotals
from nutriscan.domain.recipes import (
    Ingredient,
    IngredientContribution,
    IngredientUnit,
    RecipeResult,
    SavedRecipe,
)
from nutriscan.services.recipes import RecipeRepository


@dataclass
class SupabaseRecipeRepository(RecipeRepository):
    """Supabase implementation for saved recipes."""

    client: Client

    def create_recipe(self, user_id: UUID, recipe: SavedRecipe) -> SavedRecipe:
        """Insert a recipe row and return the stored recipe."""
        payload = recipe.to_dict()
        response = (
            self.client.table("recipes")
            .insert(
                {
                    "user_id": str(user_id),
                    "name": recipe.name,
                    "ingredients": payload["ingredients"],
                    "servings": recipe.servings,
                    "nutrition": payload["nutrition"],
                    "created_at": (
                        recipe.created_at or datetime.now(tz=UTC)
                    ).isoformat(),
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to save recipe")
        return _parse_recipe(response.data[0])

    def list_recipes(self, user_id: UUID) -> list[SavedRecipe]:
        """Return a user's recipes, newest first."""
        response = (
            self.client.table("recipes")
            .select("*")
            .eq("user_id", str(user_id))
            .order("created_at", desc=True)
            .execute()
        )
        return [_parse_recipe(row) for row in response.data or []]

    def get_recipe(self, user_id: UUID, recipe_id: UUID) -> SavedRecipe | None:
        """Return a recipe by id, if present."""
        response = (
            self.client.table("recipes")
            .select("*")
            .eq("user_id", str(user_id))
            .eq("id", str(recipe_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_recipe(response.data[0])

    def delete_recipe(self, user_id: UUID, recipe_id: UUID) -> None:
        """Delete a recipe."""
        self.client.table("recipes").delete().eq("user_id", str(user_id)).eq(
            "id", str(recipe_id)
        ).execute()


def _parse_recipe(row: dict[str, object]) -> SavedRecipe:
    created_raw = row.get("created_at")
    nutrition = row.get("nutrition") if isinstance(row.get("nutrition"), dict) else {}
    return SavedRecipe(
        id=UUID(str(row["id"])),
        name=str(row.get("name") or ""),
        ingredients=[_parse_ingredient(item) for item in row.get("ingredients") or []],
        servings=int(row.get("servings") or 1),
        nutrition=_parse_nutrition(nutrition),
        created_at=(
            datetime.fromisoformat(created_raw)
            if isinstance(created_raw, str) and created_raw
            else None
        ),
    )


def _parse_ingredient(item: dict[str, object]) -> Ingredient:
    return Ingredient(
        name=item.get("name") if isinstance(item.get("name"), str) else None,
        amount=float(item.get("amount") or 0.0),
        unit=IngredientUnit(item.get("unit") or IngredientUnit.GRAMS),
    )


def _parse_nutrition(data: dict[str, object]) -> RecipeResult:
    breakdown = [
        IngredientContribution(
            name=str(item.get("name") or ""),
            amount=float(item.get("amount") or 0.0),
            unit=IngredientUnit(item.get("unit") or IngredientUnit.GRAMS),
            nutrients=NutrientTotals.from_mapping(item),
        )
        for item in data.get("breakdown") or []
    ]
    return RecipeResult(
        total=NutrientTotals.from_mapping(data.get("total") or {}),
        per_serving=NutrientTotals.from_mapping(data.get("perServing") or {}),
        breakdown=breakdown,
        failed_ingredients=[str(name) for name in data.get("failedIngredients") or []],
    )
