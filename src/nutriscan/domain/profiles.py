"""User profile domain models."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import StrEnum

from nutriscan.domain.nutrients import NutrientBudget, NutrientLimits

_NO_DISEASE = "none"

_logger = logging.getLogger(__name__)


class Gender(StrEnum):
    """Gender as captured at onboarding."""

    MALE = "male"
    FEMALE = "female"
    OTHER = "other"
    UNSPECIFIED = "unspecified"

    @classmethod
    def parse(cls, value: object) -> "Gender":
        """Parse a free-form value, falling back to ``UNSPECIFIED``."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                return cls.UNSPECIFIED
        return cls.UNSPECIFIED


class Disease(StrEnum):
    """Health conditions the rule engine knows about."""

    DIABETES = "Diabetes"
    HYPERTENSION = "Hypertension"
    CELIAC = "Celiac"


class BmiCategory(StrEnum):
    """WHO adult BMI bands."""

    UNDERWEIGHT = "Underweight"
    NORMAL = "Normal"
    OVERWEIGHT = "Overweight"
    OBESE = "Obese"


def parse_diseases(
    values: Iterable[object] | None, strict: bool = True
) -> frozenset[Disease]:
    """Parse disease names case-insensitively.

    The onboarding placeholder ``"None"`` and blank entries are dropped.
    Unknown names raise ``ValueError`` so they are rejected at ingestion;
    with ``strict=False`` they are logged and dropped instead, for reading
    rows that were stored earlier.
    """
    if not values:
        return frozenset()
    by_name = {disease.value.lower(): disease for disease in Disease}
    parsed: set[Disease] = set()
    for value in values:
        if isinstance(value, Disease):
            parsed.add(value)
            continue
        name = str(value).strip().lower()
        if not name or name == _NO_DISEASE:
            continue
        disease = by_name.get(name)
        if disease is None:
            if strict:
                raise ValueError(f"Unknown disease condition: {value}")
            _logger.warning("Ignoring unknown disease condition: %s", value)
            continue
        parsed.add(disease)
    return frozenset(parsed)


@dataclass(frozen=True)
class UserProfile:
    """A user's body metrics, conditions and nutrient budget.

    Every field is optional so a sparsely populated profile is still valid:
    missing metrics stay ``None``, no diseases means no disease rules apply,
    and missing limits or goals fall back to defaults during budget
    resolution.
    """

    age: int | None = None
    height_cm: float | None = None
    weight_kg: float | None = None
    gender: Gender = Gender.UNSPECIFIED
    diseases: frozenset[Disease] = field(default_factory=frozenset)
    custom_limits: NutrientLimits | None = None
    daily_nutrition_goals: NutrientBudget | None = None
    bmi: float | None = None
    name: str | None = None

    def has(self, disease: Disease) -> bool:
        """Return True when the user has the given condition."""
        return disease in self.diseases

    def to_dict(self) -> dict[str, object]:
        """Serialize to the boundary shape."""
        return {
            "name": self.name,
            "age": self.age,
            "height": self.height_cm,
            "weight": self.weight_kg,
            "gender": self.gender.value,
            "diseases": sorted(disease.value for disease in self.diseases),
            "bmi": self.bmi,
            "customLimits": (
                self.custom_limits.to_dict() if self.custom_limits else None
            ),
            "dailyNutritionGoals": (
                self.daily_nutrition_goals.to_dict()
                if self.daily_nutrition_goals
                else None
            ),
        }
