"""Rule engine deciding whether a food suits a user today.

Rules run in order of severity and the first match wins, so only the single
most severe reason is reported:

1. Diabetes with more than 10 g sugar in the food: AVOID
2. Hypertension with more than 400 mg sodium in the food: WARNING
3. Food sugar above what is left of the daily sugar limit: AVOID
4. Intake plus food sugar above 80 % of the daily limit: WARNING
5. Otherwise SAFE

Only sugar and sodium gate the decision; fat and calories are informational.
"""

import logging

from nutriscan.domain.foods import Decision, EvaluationResult, FoodNutrient
from nutriscan.domain.intake import DailyIntake
from nutriscan.domain.profiles import Disease, UserProfile
from nutriscan.services.budget import resolve_budget

DIABETES_SUGAR_CEILING_G = 10
HYPERTENSION_SODIUM_CEILING_MG = 400
APPROACHING_LIMIT_RATIO = 0.8

SUGAR = "Sugar"
SODIUM = "Sodium"

_logger = logging.getLogger(__name__)


def evaluate_food(
    food: FoodNutrient,
    profile: UserProfile | None = None,
    intake: DailyIntake | None = None,
) -> EvaluationResult:
    """Return the decision for ``food`` given the profile and today's intake.

    A missing profile means no conditions and default limits; missing intake
    means nothing consumed yet.
    """
    resolved_profile = profile or UserProfile()
    consumed_sugar = intake.sugar_g if intake else 0.0
    result = _apply_rules(food, resolved_profile, consumed_sugar)
    _logger.debug(
        "Evaluated food: name=%s decision=%s factor=%s",
        food.name,
        result.decision,
        result.limiting_factor,
    )
    return result


def _apply_rules(
    food: FoodNutrient, profile: UserProfile, consumed_sugar: float
) -> EvaluationResult:
    if profile.has(Disease.DIABETES) and food.sugar_g > DIABETES_SUGAR_CEILING_G:
        return EvaluationResult(
            decision=Decision.AVOID,
            reason="Sugar content (10g+) is unsafe for Diabetes.",
            limiting_factor=SUGAR,
        )

    if (
        profile.has(Disease.HYPERTENSION)
        and food.sodium_mg > HYPERTENSION_SODIUM_CEILING_MG
    ):
        return EvaluationResult(
            decision=Decision.WARNING,
            reason="High sodium content for Hypertension.",
            limiting_factor=SODIUM,
        )

    sugar_limit = resolve_budget(profile).sugar_g
    sugar_remaining = sugar_limit - consumed_sugar
    if food.sugar_g > sugar_remaining:
        return EvaluationResult(
            decision=Decision.AVOID,
            reason=(
                "Exceeds your remaining sugar for the day "
                f"({_format_grams(sugar_remaining)}g left)."
            ),
            limiting_factor=SUGAR,
        )

    if consumed_sugar + food.sugar_g > sugar_limit * APPROACHING_LIMIT_RATIO:
        return EvaluationResult(
            decision=Decision.WARNING,
            reason="This will push you close to your daily sugar limit.",
            limiting_factor=SUGAR,
        )

    return EvaluationResult(
        decision=Decision.SAFE,
        reason="Fits within your daily goals.",
    )


def _format_grams(value: float) -> str:
    return f"{round(value, 1):g}"
