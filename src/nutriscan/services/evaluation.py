"""Per-user food evaluation."""

from dataclasses import dataclass
from datetime import UTC, date, datetime
from uuid import UUID

from nutriscan.domain.foods import EvaluationResult, FoodNutrient
from nutriscan.domain.intake import DailyIntake
from nutriscan.domain.nutrients import ZERO_TOTALS
from nutriscan.services.intake import IntakeRepository
from nutriscan.services.profiles import ProfileRepository
from nutriscan.services.rules import evaluate_food

_REFERENCE_GRAMS = 100.0


@dataclass(frozen=True)
class PortionEvaluation:
    """A food scaled to the eaten portion and the decision for it."""

    food: FoodNutrient
    grams: float
    result: EvaluationResult

    def to_dict(self) -> dict[str, object]:
        return {
            "food": self.food.to_dict(),
            "grams": self.grams,
            "result": self.result.to_dict(),
        }


@dataclass
class EvaluationService:
    """Evaluates scanned foods against a stored profile and today's intake."""

    profile_repository: ProfileRepository
    intake_repository: IntakeRepository

    def evaluate_portion(
        self,
        user_id: UUID,
        food_per_100g: FoodNutrient,
        grams: float,
        day: date | None = None,
    ) -> PortionEvaluation:
        """Scale a per-100 g food to ``grams`` and evaluate it for the user."""
        if grams <= 0:
            raise ValueError("Portion must be greater than 0 grams")
        portion = food_per_100g.scaled(grams / _REFERENCE_GRAMS)
        resolved_day = day or datetime.now(tz=UTC).date()
        profile = self.profile_repository.get_profile(user_id)
        totals = self.intake_repository.get_daily_totals(user_id, resolved_day)
        intake = DailyIntake(day=resolved_day, totals=totals or ZERO_TOTALS)
        result = evaluate_food(portion, profile, intake)
        return PortionEvaluation(food=portion, grams=grams, result=result)
