"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from nutriscan.adapters.supabase_intake_repository import SupabaseIntakeRepository
from nutriscan.adapters.supabase_profile_repository import SupabaseProfileRepository
from nutriscan.adapters.supabase_recipe_repository import SupabaseRecipeRepository
from nutriscan.config import Settings, parse_custom_ingredients
from nutriscan.services.catalog import IngredientCatalog
from nutriscan.services.evaluation import EvaluationService
from nutriscan.services.intake import IntakeService
from nutriscan.services.profiles import ProfileService
from nutriscan.services.recipes import RecipeCalculator, RecipeService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    catalog: IngredientCatalog
    recipe_calculator: RecipeCalculator
    recipe_service: RecipeService
    profile_service: ProfileService
    intake_service: IntakeService
    evaluation_service: EvaluationService


def build_catalog(settings: Settings) -> IngredientCatalog:
    """Create the reference catalog plus configured custom ingredients."""
    catalog = IngredientCatalog()
    for name, nutrition in parse_custom_ingredients(
        settings.custom_ingredients_json
    ).items():
        catalog.add(name, nutrition)
    return catalog


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    profile_repository = SupabaseProfileRepository(supabase_client)
    intake_repository = SupabaseIntakeRepository(supabase_client)
    recipe_repository = SupabaseRecipeRepository(supabase_client)

    catalog = build_catalog(resolved_settings)
    recipe_calculator = RecipeCalculator(catalog)
    return AppContainer(
        settings=resolved_settings,
        catalog=catalog,
        recipe_calculator=recipe_calculator,
        recipe_service=RecipeService(
            calculator=recipe_calculator, repository=recipe_repository
        ),
        profile_service=ProfileService(
            repository=profile_repository,
            activity_factor=resolved_settings.default_activity_factor,
        ),
        intake_service=IntakeService(intake_repository),
        evaluation_service=EvaluationService(
            profile_repository=profile_repository,
            intake_repository=intake_repository,
        ),
    )
