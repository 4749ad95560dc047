"""Tests for the nutrition goal calculator."""

import math

import pytest

from nutriscan.domain.profiles import BmiCategory, Gender
from nutriscan.services.goals import (
    ActivityLevel,
    calculate_bmi,
    calculate_bmr,
    calculate_daily_nutrition_goals,
    calculate_macro_targets,
    calculate_tdee,
    get_bmi_category,
)


def test_bmr_mifflin_male() -> None:
    expected = 10 * 70 + 6.25 * 175 - 5 * 30 + 5
    assert math.isclose(calculate_bmr(70, 175, 30, Gender.MALE), expected)


def test_bmr_mifflin_female() -> None:
    assert math.isclose(calculate_bmr(60, 165, 25, "Female"), 1345.25)


@pytest.mark.parametrize("gender", [Gender.OTHER, Gender.UNSPECIFIED, "", "robot"])
def test_bmr_non_female_uses_male_constant(gender) -> None:
    assert calculate_bmr(70, 175, 30, gender) == calculate_bmr(70, 175, 30, "male")


def test_tdee_defaults_to_light_activity() -> None:
    assert calculate_tdee(1648.75) == 2143


def test_tdee_custom_factor() -> None:
    assert calculate_tdee(1000, 1.55) == 1550


def test_macro_targets_split() -> None:
    macros = calculate_macro_targets(2143, 70)

    assert macros == {"protein": 161, "carbs": 241, "fat": 60}


def test_daily_goals_compose_calculator_steps() -> None:
    goals = calculate_daily_nutrition_goals(70, 175, 30, "male", False)

    assert goals.calories == 2143
    assert goals.protein_g == 161
    assert goals.carbs_g == 241
    assert goals.fat_g == 60
    assert goals.sugar_g == 30
    assert goals.sodium_mg == 2300


def test_hypertension_only_lowers_sodium() -> None:
    with_flag = calculate_daily_nutrition_goals(80, 180, 45, "female", True)
    without_flag = calculate_daily_nutrition_goals(80, 180, 45, "female", False)

    assert with_flag.sodium_mg == 1500
    assert without_flag.sodium_mg == 2300
    assert with_flag.calories == without_flag.calories
    assert with_flag.protein_g == without_flag.protein_g
    assert with_flag.carbs_g == without_flag.carbs_g
    assert with_flag.fat_g == without_flag.fat_g
    assert with_flag.sugar_g == without_flag.sugar_g


@pytest.mark.parametrize("gender", ["male", "female"])
def test_calories_monotonic_in_weight_and_height(gender: str) -> None:
    previous = 0.0
    for weight, height in [(50, 150), (60, 160), (60, 170), (75, 170), (90, 190)]:
        calories = calculate_daily_nutrition_goals(weight, height, 40, gender).calories
        assert calories >= previous
        previous = calories


def test_activity_level_changes_calories() -> None:
    light = calculate_daily_nutrition_goals(70, 175, 30)
    active = calculate_daily_nutrition_goals(
        70, 175, 30, activity_factor=ActivityLevel.ACTIVE.factor
    )

    assert ActivityLevel.LIGHT.factor == 1.3
    assert active.calories > light.calories


@pytest.mark.parametrize(
    ("weight", "height"), [(70, 175), (55.5, 162), (102, 188), (45, 150)]
)
def test_bmi_formula(weight: float, height: float) -> None:
    expected = round(weight / (height / 100) ** 2, 1)
    assert calculate_bmi(weight, height) == pytest.approx(expected, abs=0.05)


def test_bmi_rounds_to_one_decimal() -> None:
    assert calculate_bmi(70, 175) == 22.9


@pytest.mark.parametrize(
    ("bmi", "category"),
    [
        (18.49, BmiCategory.UNDERWEIGHT),
        (18.5, BmiCategory.NORMAL),
        (24.99, BmiCategory.NORMAL),
        (25, BmiCategory.OVERWEIGHT),
        (29.99, BmiCategory.OVERWEIGHT),
        (30, BmiCategory.OBESE),
    ],
)
def test_bmi_category_boundaries(bmi: float, category: BmiCategory) -> None:
    assert get_bmi_category(bmi) is category


def test_bmi_zero_height_is_not_guarded() -> None:
    with pytest.raises(ZeroDivisionError):
        calculate_bmi(70, 0)
