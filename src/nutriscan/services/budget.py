"""Resolution of the nutrient budget a rule evaluation runs against."""

from dataclasses import fields

from nutriscan.domain.nutrients import NutrientBudget
from nutriscan.domain.profiles import UserProfile

DEFAULT_BUDGET = NutrientBudget(
    calories=2000,
    protein_g=50,
    carbs_g=275,
    fat_g=70,
    sugar_g=30,
    sodium_mg=2300,
)


def resolve_budget(profile: UserProfile | None) -> NutrientBudget:
    """Resolve each channel from custom limit, computed goal, then default.

    A custom limit of zero counts as unset.
    """
    if profile is None:
        return DEFAULT_BUDGET
    resolved: dict[str, float] = {}
    for channel in fields(NutrientBudget):
        custom = (
            getattr(profile.custom_limits, channel.name)
            if profile.custom_limits
            else None
        )
        goal = (
            getattr(profile.daily_nutrition_goals, channel.name)
            if profile.daily_nutrition_goals
            else None
        )
        resolved[channel.name] = custom or goal or getattr(DEFAULT_BUDGET, channel.name)
    return NutrientBudget(**resolved)
