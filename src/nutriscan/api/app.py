"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import UTC, date, datetime
from uuid import UUID

from fastapi import FastAPI, HTTPException, Request, status

from nutriscan.api.models import (
    CustomIngredientRequest,
    EvaluateRequest,
    GoalsRequest,
    LogFoodRequest,
    PortionEvaluateRequest,
    ProfileRequest,
    RecipeRequest,
    SaveRecipeRequest,
    ServingUpdateRequest,
)
from nutriscan.app_logging import configure_logging
from nutriscan.containers import AppContainer
from nutriscan.domain.errors import (
    IntakeError,
    ProfileNotFoundError,
    ProfileValidationError,
    RecipeError,
)
from nutriscan.domain.intake import FoodLogEntry
from nutriscan.services.goals import (
    DEFAULT_ACTIVITY_FACTOR,
    calculate_bmi,
    calculate_daily_nutrition_goals,
    get_bmi_category,
)
from nutriscan.services.profiles import ProfileInput
from nutriscan.services.rules import evaluate_food


def create_app(container: AppContainer) -> FastAPI:  # noqa: PLR0915
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info(
            "Starting nutriscan: environment=%s ingredients=%s",
            app.state.container.settings.environment,
            len(app.state.container.catalog),
        )
        yield

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/goals")
    async def goals(body: GoalsRequest) -> dict[str, object]:
        """Return daily nutrition goals and BMI for body metrics."""
        factor = (
            body.activity_level.factor if body.activity_level else DEFAULT_ACTIVITY_FACTOR
        )
        budget = calculate_daily_nutrition_goals(
            body.weight,
            body.height,
            body.age,
            body.gender,
            body.has_hypertension,
            activity_factor=factor,
        )
        bmi = calculate_bmi(body.weight, body.height)
        return {
            "dailyNutritionGoals": budget.to_dict(),
            "bmi": bmi,
            "bmiCategory": get_bmi_category(bmi).value,
        }

    @app.post("/evaluate")
    async def evaluate(body: EvaluateRequest) -> dict[str, object]:
        """Evaluate a food against an inline profile and intake."""
        result = evaluate_food(
            body.food.to_food(),
            body.profile.to_profile() if body.profile else None,
            body.intake.to_intake() if body.intake else None,
        )
        return result.to_dict()

    @app.post("/recipes/calculate")
    async def calculate_recipe(body: RecipeRequest, request: Request) -> dict[str, object]:
        """Calculate total and per-serving nutrition for ingredients."""
        state_container: AppContainer = request.app.state.container
        try:
            result = state_container.recipe_calculator.calculate(
                body.to_ingredients(), body.servings
            )
        except RecipeError as exc:
            raise _unprocessable(exc) from exc
        return result.to_dict()

    @app.get("/ingredients")
    async def list_ingredients(request: Request) -> dict[str, list[str]]:
        """Return known ingredient names."""
        state_container: AppContainer = request.app.state.container
        return {
            "ingredients": state_container.recipe_calculator.get_available_ingredients()
        }

    @app.post("/ingredients", status_code=status.HTTP_201_CREATED)
    async def add_ingredient(
        body: CustomIngredientRequest, request: Request
    ) -> dict[str, str]:
        """Add or replace a per-100 g catalog entry."""
        state_container: AppContainer = request.app.state.container
        try:
            state_container.recipe_calculator.add_custom_ingredient(
                body.name, body.to_totals()
            )
        except ValueError as exc:
            raise _unprocessable(exc) from exc
        return {"name": body.name.strip().lower()}

    @app.get("/users/{user_id}/profile")
    async def get_profile(user_id: UUID, request: Request) -> dict[str, object]:
        """Return a stored profile."""
        state_container: AppContainer = request.app.state.container
        profile = state_container.profile_service.get_profile(user_id)
        if profile is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return profile.to_dict()

    @app.put("/users/{user_id}/profile")
    async def put_profile(
        user_id: UUID, body: ProfileRequest, request: Request
    ) -> dict[str, object]:
        """Create the profile on first save, otherwise update it."""
        state_container: AppContainer = request.app.state.container
        service = state_container.profile_service
        data = ProfileInput(
            age=body.age,
            height_cm=body.height,
            weight_kg=body.weight,
            gender=body.gender,
            diseases=body.diseases,
            name=body.name,
            activity_level=body.activity_level,
        )
        try:
            if service.get_profile(user_id) is None:
                profile = service.complete_onboarding(user_id, data)
            else:
                profile = service.update_profile(user_id, data)
        except ProfileValidationError as exc:
            raise _unprocessable(exc) from exc
        except ProfileNotFoundError as exc:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)
            ) from exc
        return profile.to_dict()

    @app.post("/users/{user_id}/evaluate")
    async def evaluate_portion(
        user_id: UUID, body: PortionEvaluateRequest, request: Request
    ) -> dict[str, object]:
        """Evaluate a portion of a per-100 g food for a stored user."""
        state_container: AppContainer = request.app.state.container
        evaluation = state_container.evaluation_service.evaluate_portion(
            user_id, body.food.to_food(), body.grams, body.day
        )
        return evaluation.to_dict()

    @app.post("/users/{user_id}/intake", status_code=status.HTTP_201_CREATED)
    async def log_food(
        user_id: UUID, body: LogFoodRequest, request: Request
    ) -> dict[str, object]:
        """Log an eaten food and update the day's totals."""
        state_container: AppContainer = request.app.state.container
        entry = FoodLogEntry(
            name=body.name,
            serving_g=body.serving_size,
            nutrients=body.to_food().nutrients,
            day=body.day or _today(),
        )
        created = state_container.intake_service.log_food(user_id, entry)
        return created.to_dict()

    @app.patch("/users/{user_id}/intake/entries/{entry_id}")
    async def update_serving(
        user_id: UUID, entry_id: UUID, body: ServingUpdateRequest, request: Request
    ) -> dict[str, object]:
        """Rescale a logged food to a new serving size."""
        state_container: AppContainer = request.app.state.container
        try:
            updated = state_container.intake_service.update_serving(
                user_id, entry_id, body.serving_size
            )
        except IntakeError as exc:
            raise _unprocessable(exc) from exc
        return updated.to_dict()

    @app.delete(
        "/users/{user_id}/intake/entries/{entry_id}",
        status_code=status.HTTP_204_NO_CONTENT,
    )
    async def delete_food(user_id: UUID, entry_id: UUID, request: Request) -> None:
        """Remove a logged food and subtract it from the day's totals."""
        state_container: AppContainer = request.app.state.container
        try:
            state_container.intake_service.delete_food(user_id, entry_id)
        except IntakeError as exc:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)
            ) from exc

    @app.get("/users/{user_id}/intake/{day}")
    async def get_intake(user_id: UUID, day: date, request: Request) -> dict[str, object]:
        """Return the day's totals and logged foods."""
        state_container: AppContainer = request.app.state.container
        intake = state_container.intake_service.get_daily_intake(user_id, day)
        entries = state_container.intake_service.list_entries(user_id, day)
        return {
            "intake": intake.to_dict(),
            "entries": [entry.to_dict() for entry in entries],
        }

    @app.get("/users/{user_id}/history")
    async def get_history(
        user_id: UUID, request: Request, limit: int = 30
    ) -> dict[str, object]:
        """Return recent daily totals, newest first."""
        state_container: AppContainer = request.app.state.container
        history = state_container.intake_service.get_history(user_id, limit)
        return {"history": [day.to_dict() for day in history]}

    @app.get("/users/{user_id}/recipes")
    async def list_recipes(user_id: UUID, request: Request) -> dict[str, object]:
        """Return saved recipes, newest first."""
        state_container: AppContainer = request.app.state.container
        recipes = state_container.recipe_service.list_recipes(user_id)
        return {"recipes": [recipe.to_dict() for recipe in recipes]}

    @app.post("/users/{user_id}/recipes", status_code=status.HTTP_201_CREATED)
    async def save_recipe(
        user_id: UUID, body: SaveRecipeRequest, request: Request
    ) -> dict[str, object]:
        """Calculate and save a recipe."""
        state_container: AppContainer = request.app.state.container
        try:
            recipe = state_container.recipe_service.save_recipe(
                user_id, body.name, body.to_ingredients(), body.servings
            )
        except RecipeError as exc:
            raise _unprocessable(exc) from exc
        return recipe.to_dict()

    @app.delete(
        "/users/{user_id}/recipes/{recipe_id}",
        status_code=status.HTTP_204_NO_CONTENT,
    )
    async def delete_recipe(user_id: UUID, recipe_id: UUID, request: Request) -> None:
        """Delete a saved recipe."""
        state_container: AppContainer = request.app.state.container
        state_container.recipe_service.delete_recipe(user_id, recipe_id)

    return app


def _unprocessable(exc: Exception) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)
    )


def _today() -> date:
    return datetime.now(tz=UTC).date()
