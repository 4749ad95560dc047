"""Shared test fixtures."""

import threading
from dataclasses import dataclass, field, replace
from datetime import date
from uuid import UUID, uuid4

import pytest

from nutriscan.config import Settings
from nutriscan.containers import AppContainer
from nutriscan.domain.foods import FoodNutrient
from nutriscan.domain.intake import DailyIntake, FoodLogEntry
from nutriscan.domain.nutrients import NutrientTotals
from nutriscan.domain.profiles import UserProfile
from nutriscan.domain.recipes import SavedRecipe
from nutriscan.services.catalog import IngredientCatalog
from nutriscan.services.evaluation import EvaluationService
from nutriscan.services.intake import IntakeRepository, IntakeService
from nutriscan.services.profiles import ProfileRepository, ProfileService
from nutriscan.services.recipes import (
    RecipeCalculator,
    RecipeRepository,
    RecipeService,
)


@dataclass
class InMemoryProfileRepository(ProfileRepository):
    """In-memory profile repository for tests."""

    profiles: dict[UUID, UserProfile] = field(default_factory=dict)

    def get_profile(self, user_id: UUID) -> UserProfile | None:
        return self.profiles.get(user_id)

    def save_profile(self, user_id: UUID, profile: UserProfile) -> None:
        self.profiles[user_id] = profile


@dataclass
class InMemoryIntakeRepository(IntakeRepository):
    """In-memory food log and daily totals repository for tests."""

    entries: dict[UUID, tuple[UUID, FoodLogEntry]] = field(default_factory=dict)
    totals: dict[tuple[UUID, date], NutrientTotals] = field(default_factory=dict)
    lock: threading.Lock = field(default_factory=threading.Lock, compare=False)

    def create_entry(self, user_id: UUID, entry: FoodLogEntry) -> FoodLogEntry:
        created = replace(entry, id=uuid4())
        self.entries[created.id] = (user_id, created)
        return created

    def get_entry(self, user_id: UUID, entry_id: UUID) -> FoodLogEntry | None:
        stored = self.entries.get(entry_id)
        if stored is None or stored[0] != user_id:
            return None
        return stored[1]

    def update_entry(self, user_id: UUID, entry: FoodLogEntry) -> None:
        self.entries[entry.id] = (user_id, entry)

    def delete_entry(self, user_id: UUID, entry_id: UUID) -> None:
        self.entries.pop(entry_id, None)

    def list_entries(self, user_id: UUID, day: date) -> list[FoodLogEntry]:
        return [
            entry
            for owner, entry in self.entries.values()
            if owner == user_id and entry.day == day
        ]

    def get_daily_totals(self, user_id: UUID, day: date) -> NutrientTotals | None:
        return self.totals.get((user_id, day))

    def add_daily_totals(
        self, user_id: UUID, day: date, delta: NutrientTotals
    ) -> None:
        with self.lock:
            current = self.totals.get((user_id, day), NutrientTotals())
            self.totals[(user_id, day)] = current + delta

    def list_daily_totals(self, user_id: UUID, limit: int) -> list[DailyIntake]:
        days = sorted(
            (day for owner, day in self.totals if owner == user_id), reverse=True
        )
        return [
            DailyIntake(day=day, totals=self.totals[(user_id, day)])
            for day in days[:limit]
        ]


@dataclass
class InMemoryRecipeRepository(RecipeRepository):
    """In-memory saved recipe repository for tests."""

    recipes: dict[UUID, tuple[UUID, SavedRecipe]] = field(default_factory=dict)

    def create_recipe(self, user_id: UUID, recipe: SavedRecipe) -> SavedRecipe:
        created = replace(recipe, id=uuid4())
        self.recipes[created.id] = (user_id, created)
        return created

    def list_recipes(self, user_id: UUID) -> list[SavedRecipe]:
        return [recipe for owner, recipe in self.recipes.values() if owner == user_id]

    def get_recipe(self, user_id: UUID, recipe_id: UUID) -> SavedRecipe | None:
        stored = self.recipes.get(recipe_id)
        if stored is None or stored[0] != user_id:
            return None
        return stored[1]

    def delete_recipe(self, user_id: UUID, recipe_id: UUID) -> None:
        self.recipes.pop(recipe_id, None)


def make_food(name: str = "test food", **values: float) -> FoodNutrient:
    """Build a food with zero defaults for unspecified channels."""
    return FoodNutrient(
        name=name,
        calories=values.get("calories", 0.0),
        sugar_g=values.get("sugar_g", 0.0),
        sodium_mg=values.get("sodium_mg", 0.0),
        fat_g=values.get("fat_g", 0.0),
        carbs_g=values.get("carbs_g", 0.0),
        protein_g=values.get("protein_g", 0.0),
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
    )


@pytest.fixture
def profile_repository() -> InMemoryProfileRepository:
    return InMemoryProfileRepository()


@pytest.fixture
def intake_repository() -> InMemoryIntakeRepository:
    return InMemoryIntakeRepository()


@pytest.fixture
def recipe_repository() -> InMemoryRecipeRepository:
    return InMemoryRecipeRepository()


@pytest.fixture
def catalog() -> IngredientCatalog:
    return IngredientCatalog()


@pytest.fixture
def container(
    settings: Settings,
    catalog: IngredientCatalog,
    profile_repository: InMemoryProfileRepository,
    intake_repository: InMemoryIntakeRepository,
    recipe_repository: InMemoryRecipeRepository,
) -> AppContainer:
    recipe_calculator = RecipeCalculator(catalog)
    return AppContainer(
        settings=settings,
        catalog=catalog,
        recipe_calculator=recipe_calculator,
        recipe_service=RecipeService(
            calculator=recipe_calculator, repository=recipe_repository
        ),
        profile_service=ProfileService(profile_repository),
        intake_service=IntakeService(intake_repository),
        evaluation_service=EvaluationService(
            profile_repository=profile_repository,
            intake_repository=intake_repository,
        ),
    )
