"""Nutrition goal calculator.

Derives a user's daily nutrient budget from body metrics:

1. BMR via Mifflin-St Jeor
2. TDEE as BMR times an activity factor (1.3 by default)
3. Macro split of the maintenance calories (30 % protein, 45 % carbs,
   25 % fat)
4. Fixed sugar ceiling and a sodium ceiling lowered for hypertension

All functions are pure. They do not validate their inputs: callers must pass
positive weight, height and age.
"""

from enum import Enum

from nutriscan.domain.nutrients import NutrientBudget, round_half_up
from nutriscan.domain.profiles import BmiCategory, Gender

DEFAULT_ACTIVITY_FACTOR = 1.3

PROTEIN_CALORIE_SHARE = 0.30
CARBS_CALORIE_SHARE = 0.45
FAT_CALORIE_SHARE = 0.25
KCAL_PER_G_PROTEIN = 4
KCAL_PER_G_CARBS = 4
KCAL_PER_G_FAT = 9

DAILY_SUGAR_LIMIT_G = 30
DAILY_SODIUM_LIMIT_MG = 2300
HYPERTENSION_SODIUM_LIMIT_MG = 1500

_UNDERWEIGHT_BELOW = 18.5
_NORMAL_BELOW = 25
_OVERWEIGHT_BELOW = 30


class ActivityLevel(Enum):
    """Physical activity levels and their TDEE multipliers."""

    SEDENTARY = "sedentary"
    LIGHT = "light"
    MODERATE = "moderate"
    ACTIVE = "active"
    VERY_ACTIVE = "very_active"

    @property
    def factor(self) -> float:
        return _ACTIVITY_FACTORS[self]


_ACTIVITY_FACTORS = {
    ActivityLevel.SEDENTARY: 1.2,
    ActivityLevel.LIGHT: DEFAULT_ACTIVITY_FACTOR,
    ActivityLevel.MODERATE: 1.55,
    ActivityLevel.ACTIVE: 1.725,
    ActivityLevel.VERY_ACTIVE: 1.9,
}


def calculate_bmr(
    weight_kg: float, height_cm: float, age_years: float, gender: Gender | str
) -> float:
    """Return basal metabolic rate in kcal/day.

    Only ``female`` uses the -161 constant; every other gender uses +5.
    """
    base = 10 * weight_kg + 6.25 * height_cm - 5 * age_years
    if Gender.parse(gender) is Gender.FEMALE:
        return base - 161
    return base + 5


def calculate_tdee(bmr: float, activity_factor: float = DEFAULT_ACTIVITY_FACTOR) -> int:
    """Return total daily energy expenditure rounded to whole kcal."""
    return int(round_half_up(bmr * activity_factor))


def calculate_macro_targets(
    maintenance_calories: float, weight_kg: float
) -> dict[str, int]:
    """Split maintenance calories into protein, carbs and fat grams.

    Each amount is rounded on its own, so the grams converted back to kcal
    may differ slightly from ``maintenance_calories``. ``weight_kg`` is
    accepted for callers that pass it but does not affect the split.
    """
    protein_kcal = maintenance_calories * PROTEIN_CALORIE_SHARE
    carbs_kcal = maintenance_calories * CARBS_CALORIE_SHARE
    fat_kcal = maintenance_calories * FAT_CALORIE_SHARE
    return {
        "protein": int(round_half_up(protein_kcal / KCAL_PER_G_PROTEIN)),
        "carbs": int(round_half_up(carbs_kcal / KCAL_PER_G_CARBS)),
        "fat": int(round_half_up(fat_kcal / KCAL_PER_G_FAT)),
    }


def calculate_daily_nutrition_goals(  # noqa: PLR0913
    weight_kg: float,
    height_cm: float,
    age_years: float,
    gender: Gender | str = Gender.MALE,
    has_hypertension: bool = False,
    activity_factor: float = DEFAULT_ACTIVITY_FACTOR,
) -> NutrientBudget:
    """Return the complete daily budget for a user's body metrics."""
    bmr = calculate_bmr(weight_kg, height_cm, age_years, gender)
    maintenance_calories = calculate_tdee(bmr, activity_factor)
    macros = calculate_macro_targets(maintenance_calories, weight_kg)
    return NutrientBudget(
        calories=maintenance_calories,
        protein_g=macros["protein"],
        carbs_g=macros["carbs"],
        fat_g=macros["fat"],
        sugar_g=DAILY_SUGAR_LIMIT_G,
        sodium_mg=(
            HYPERTENSION_SODIUM_LIMIT_MG if has_hypertension else DAILY_SODIUM_LIMIT_MG
        ),
    )


def calculate_bmi(weight_kg: float, height_cm: float) -> float:
    """Return body mass index rounded to one decimal place."""
    height_m = height_cm / 100
    return round_half_up(weight_kg / (height_m * height_m), 1)


def get_bmi_category(bmi: float) -> BmiCategory:
    """Return the BMI band; each band's upper bound is exclusive."""
    if bmi < _UNDERWEIGHT_BELOW:
        return BmiCategory.UNDERWEIGHT
    if bmi < _NORMAL_BELOW:
        return BmiCategory.NORMAL
    if bmi < _OVERWEIGHT_BELOW:
        return BmiCategory.OVERWEIGHT
    return BmiCategory.OBESE
