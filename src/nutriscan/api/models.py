"""Pydantic request models for the JSON API.

Free-form strings (gender, disease names, units) are validated here so the
domain core only ever sees enum values.
"""

from datetime import date
from typing import Annotated

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field

from nutriscan.domain.foods import FoodNutrient
from nutriscan.domain.intake import DailyIntake
from nutriscan.domain.nutrients import NutrientBudget, NutrientLimits, NutrientTotals
from nutriscan.domain.profiles import Disease, Gender, UserProfile, parse_diseases
from nutriscan.domain.recipes import Ingredient, IngredientUnit
from nutriscan.services.goals import ActivityLevel


def _coerce_diseases(value: object) -> frozenset[Disease]:
    if value is None:
        return frozenset()
    if isinstance(value, str):
        return parse_diseases([value])
    return parse_diseases(value)


GenderField = Annotated[Gender, BeforeValidator(Gender.parse)]
DiseasesField = Annotated[frozenset[Disease], BeforeValidator(_coerce_diseases)]


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class NutrientsPayload(_CamelModel):
    """Six nutrient channels; every channel is optional."""

    calories: float | None = Field(default=None, ge=0)
    protein: float | None = Field(default=None, ge=0)
    carbs: float | None = Field(default=None, ge=0)
    fat: float | None = Field(default=None, ge=0)
    sugar: float | None = Field(default=None, ge=0)
    sodium: float | None = Field(default=None, ge=0)

    def to_limits(self) -> NutrientLimits:
        return NutrientLimits.from_mapping(self.model_dump())

    def to_totals(self) -> NutrientTotals:
        return NutrientTotals.from_mapping(self.model_dump())


class BudgetPayload(_CamelModel):
    """A complete nutrient budget."""

    calories: float = Field(ge=0)
    protein: float = Field(ge=0)
    carbs: float = Field(ge=0)
    fat: float = Field(ge=0)
    sugar: float = Field(ge=0)
    sodium: float = Field(ge=0)

    def to_budget(self) -> NutrientBudget:
        return NutrientBudget.from_mapping(self.model_dump())


class FoodPayload(_CamelModel):
    """A food's nutrient values."""

    name: str
    calories: float = Field(ge=0)
    sugar: float = Field(ge=0)
    sodium: float = Field(ge=0)
    fat: float = Field(ge=0)
    carbs: float = Field(default=0.0, ge=0)
    protein: float = Field(default=0.0, ge=0)

    def to_food(self) -> FoodNutrient:
        return FoodNutrient(
            name=self.name,
            calories=self.calories,
            sugar_g=self.sugar,
            sodium_mg=self.sodium,
            fat_g=self.fat,
            carbs_g=self.carbs,
            protein_g=self.protein,
        )


class ProfilePayload(_CamelModel):
    """A possibly sparse user profile."""

    age: int | None = Field(default=None, gt=0)
    height: float | None = Field(default=None, gt=0)
    weight: float | None = Field(default=None, gt=0)
    gender: GenderField = Gender.UNSPECIFIED
    diseases: DiseasesField = frozenset()
    custom_limits: NutrientsPayload | None = Field(default=None, alias="customLimits")
    daily_nutrition_goals: BudgetPayload | None = Field(
        default=None, alias="dailyNutritionGoals"
    )

    def to_profile(self) -> UserProfile:
        return UserProfile(
            age=self.age,
            height_cm=self.height,
            weight_kg=self.weight,
            gender=self.gender,
            diseases=self.diseases,
            custom_limits=(
                self.custom_limits.to_limits() if self.custom_limits else None
            ),
            daily_nutrition_goals=(
                self.daily_nutrition_goals.to_budget()
                if self.daily_nutrition_goals
                else None
            ),
        )


class DailyIntakePayload(_CamelModel):
    """Running daily totals as stored by the daily summary."""

    total_calories: float | None = Field(default=None, alias="totalCalories")
    total_protein: float | None = Field(default=None, alias="totalProtein")
    total_carbs: float | None = Field(default=None, alias="totalCarbs")
    total_fat: float | None = Field(default=None, alias="totalFat")
    total_sugar: float | None = Field(default=None, alias="totalSugar")
    total_sodium: float | None = Field(default=None, alias="totalSodium")

    def to_intake(self) -> DailyIntake:
        return DailyIntake.from_summary(self.model_dump(by_alias=True))


class EvaluateRequest(_CamelModel):
    """Body for a stateless food evaluation."""

    food: FoodPayload
    profile: ProfilePayload | None = None
    intake: DailyIntakePayload | None = Field(default=None, alias="dailyIntake")


class GoalsRequest(_CamelModel):
    """Body metrics for goal calculation."""

    weight: float = Field(gt=0)
    height: float = Field(gt=0)
    age: int = Field(gt=0)
    gender: GenderField = Gender.MALE
    has_hypertension: bool = Field(default=False, alias="hasHypertension")
    activity_level: ActivityLevel | None = Field(default=None, alias="activityLevel")


class IngredientPayload(_CamelModel):
    """One recipe ingredient line."""

    name: str | None = None
    amount: float = Field(ge=0, allow_inf_nan=False)
    unit: IngredientUnit = IngredientUnit.GRAMS

    def to_ingredient(self) -> Ingredient:
        return Ingredient(name=self.name, amount=self.amount, unit=self.unit)


class RecipeRequest(_CamelModel):
    """Ingredients and servings for a recipe calculation."""

    ingredients: list[IngredientPayload]
    servings: float = Field(default=1, allow_inf_nan=False)

    def to_ingredients(self) -> list[Ingredient]:
        return [item.to_ingredient() for item in self.ingredients]


class SaveRecipeRequest(RecipeRequest):
    """A recipe to calculate and save."""

    name: str = Field(min_length=1)
    servings: int = 1


class CustomIngredientRequest(NutrientsPayload):
    """A per-100 g catalog entry."""

    name: str = Field(min_length=1)


class ProfileRequest(_CamelModel):
    """Body metrics and conditions from onboarding or profile edit."""

    age: int = Field(gt=0)
    height: float = Field(gt=0)
    weight: float = Field(gt=0)
    gender: GenderField = Gender.UNSPECIFIED
    diseases: DiseasesField = frozenset()
    name: str | None = None
    activity_level: ActivityLevel | None = Field(default=None, alias="activityLevel")


class PortionEvaluateRequest(_CamelModel):
    """A per-100 g food and the portion eaten."""

    food: FoodPayload
    grams: float = Field(gt=0)
    day: date | None = Field(default=None, alias="date")


class LogFoodRequest(FoodPayload):
    """A food portion to add to the daily log."""

    serving_size: float = Field(gt=0, alias="servingSize")
    day: date | None = Field(default=None, alias="date")


class ServingUpdateRequest(_CamelModel):
    """A new serving size for a logged food."""

    serving_size: float = Field(gt=0, alias="servingSize")
