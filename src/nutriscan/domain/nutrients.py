"""Six-channel nutrient value types."""

import math
from collections.abc import Mapping
from dataclasses import dataclass, fields


def round_half_up(value: float, digits: int = 0) -> float:
    """Round to ``digits`` decimals with halves rounded towards +infinity."""
    factor = 10**digits
    return math.floor(value * factor + 0.5) / factor


@dataclass(frozen=True)
class NutrientTotals:
    """Amounts for the six tracked nutrient channels.

    Every channel adds, subtracts and scales on its own; no channel is ever
    derived from another.
    """

    calories: float = 0.0
    protein_g: float = 0.0
    carbs_g: float = 0.0
    fat_g: float = 0.0
    sugar_g: float = 0.0
    sodium_mg: float = 0.0

    def __add__(self, other: "NutrientTotals") -> "NutrientTotals":
        return NutrientTotals(
            calories=self.calories + other.calories,
            protein_g=self.protein_g + other.protein_g,
            carbs_g=self.carbs_g + other.carbs_g,
            fat_g=self.fat_g + other.fat_g,
            sugar_g=self.sugar_g + other.sugar_g,
            sodium_mg=self.sodium_mg + other.sodium_mg,
        )

    def __sub__(self, other: "NutrientTotals") -> "NutrientTotals":
        return self + other.scaled(-1)

    def scaled(self, ratio: float) -> "NutrientTotals":
        """Return every channel multiplied by ``ratio``."""
        return NutrientTotals(
            calories=self.calories * ratio,
            protein_g=self.protein_g * ratio,
            carbs_g=self.carbs_g * ratio,
            fat_g=self.fat_g * ratio,
            sugar_g=self.sugar_g * ratio,
            sodium_mg=self.sodium_mg * ratio,
        )

    def rounded(self) -> "NutrientTotals":
        """Round calories to whole numbers and the other channels to 0.1."""
        return NutrientTotals(
            calories=round_half_up(self.calories),
            protein_g=round_half_up(self.protein_g, 1),
            carbs_g=round_half_up(self.carbs_g, 1),
            fat_g=round_half_up(self.fat_g, 1),
            sugar_g=round_half_up(self.sugar_g, 1),
            sodium_mg=round_half_up(self.sodium_mg, 1),
        )

    def to_dict(self) -> dict[str, float]:
        """Serialize with the plain channel names used at the boundary."""
        return {
            "calories": self.calories,
            "protein": self.protein_g,
            "carbs": self.carbs_g,
            "fat": self.fat_g,
            "sugar": self.sugar_g,
            "sodium": self.sodium_mg,
        }

    @classmethod
    def from_mapping(cls, data: Mapping[str, object]) -> "NutrientTotals":
        """Build from a boundary mapping, treating missing channels as zero."""
        return cls(
            calories=_to_float(data.get("calories")),
            protein_g=_to_float(data.get("protein")),
            carbs_g=_to_float(data.get("carbs")),
            fat_g=_to_float(data.get("fat")),
            sugar_g=_to_float(data.get("sugar")),
            sodium_mg=_to_float(data.get("sodium")),
        )


ZERO_TOTALS = NutrientTotals()


@dataclass(frozen=True)
class NutrientBudget:
    """Personalized daily targets (calories, macros) and limits (sugar, sodium)."""

    calories: float
    protein_g: float
    carbs_g: float
    fat_g: float
    sugar_g: float
    sodium_mg: float

    def to_dict(self) -> dict[str, float]:
        """Serialize with the plain channel names used at the boundary."""
        return {
            "calories": self.calories,
            "protein": self.protein_g,
            "carbs": self.carbs_g,
            "fat": self.fat_g,
            "sugar": self.sugar_g,
            "sodium": self.sodium_mg,
        }

    @classmethod
    def from_mapping(cls, data: Mapping[str, object]) -> "NutrientBudget":
        """Build from a complete boundary mapping."""
        totals = NutrientTotals.from_mapping(data)
        return cls(**{f.name: getattr(totals, f.name) for f in fields(cls)})


@dataclass(frozen=True)
class NutrientLimits:
    """Custom per-user overrides; ``None`` means the channel is not overridden."""

    calories: float | None = None
    protein_g: float | None = None
    carbs_g: float | None = None
    fat_g: float | None = None
    sugar_g: float | None = None
    sodium_mg: float | None = None

    def to_dict(self) -> dict[str, float]:
        """Serialize only the channels that are set."""
        values = {
            "calories": self.calories,
            "protein": self.protein_g,
            "carbs": self.carbs_g,
            "fat": self.fat_g,
            "sugar": self.sugar_g,
            "sodium": self.sodium_mg,
        }
        return {key: value for key, value in values.items() if value is not None}

    @classmethod
    def from_mapping(cls, data: Mapping[str, object]) -> "NutrientLimits":
        """Build from a partial boundary mapping."""
        return cls(
            calories=_to_optional_float(data.get("calories")),
            protein_g=_to_optional_float(data.get("protein")),
            carbs_g=_to_optional_float(data.get("carbs")),
            fat_g=_to_optional_float(data.get("fat")),
            sugar_g=_to_optional_float(data.get("sugar")),
            sodium_mg=_to_optional_float(data.get("sodium")),
        )

    @classmethod
    def from_budget(cls, budget: NutrientBudget) -> "NutrientLimits":
        """Mirror a computed budget as explicit limits."""
        return cls(**{f.name: getattr(budget, f.name) for f in fields(cls)})


def _to_float(value: object) -> float:
    if isinstance(value, int | float) and not isinstance(value, bool):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return 0.0
    return 0.0


def _to_optional_float(value: object) -> float | None:
    if value is None:
        return None
    return _to_float(value)
