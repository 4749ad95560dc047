"""Food evaluation domain models."""

from dataclasses import dataclass
from enum import StrEnum

from nutriscan.domain.nutrients import NutrientTotals


class Decision(StrEnum):
    """Suitability verdict for a food."""

    SAFE = "SAFE"
    WARNING = "WARNING"
    AVOID = "AVOID"


@dataclass(frozen=True)
class FoodNutrient:
    """A candidate food being evaluated; carbs and protein default to zero."""

    name: str
    calories: float
    sugar_g: float
    sodium_mg: float
    fat_g: float
    carbs_g: float = 0.0
    protein_g: float = 0.0

    @property
    def nutrients(self) -> NutrientTotals:
        """Return the food's values as six-channel totals."""
        return NutrientTotals(
            calories=self.calories,
            protein_g=self.protein_g,
            carbs_g=self.carbs_g,
            fat_g=self.fat_g,
            sugar_g=self.sugar_g,
            sodium_mg=self.sodium_mg,
        )

    def scaled(self, ratio: float) -> "FoodNutrient":
        """Return the food with every channel multiplied by ``ratio``."""
        return FoodNutrient.from_totals(self.name, self.nutrients.scaled(ratio))

    @classmethod
    def from_totals(cls, name: str, totals: NutrientTotals) -> "FoodNutrient":
        return cls(
            name=name,
            calories=totals.calories,
            sugar_g=totals.sugar_g,
            sodium_mg=totals.sodium_mg,
            fat_g=totals.fat_g,
            carbs_g=totals.carbs_g,
            protein_g=totals.protein_g,
        )

    def to_dict(self) -> dict[str, object]:
        return {"name": self.name, **self.nutrients.to_dict()}


@dataclass(frozen=True)
class EvaluationResult:
    """Outcome of a rule engine evaluation."""

    decision: Decision
    reason: str
    limiting_factor: str | None = None

    def to_dict(self) -> dict[str, object]:
        """Serialize to the boundary shape, omitting an absent limiting factor."""
        payload: dict[str, object] = {
            "decision": self.decision.value,
            "reason": self.reason,
        }
        if self.limiting_factor is not None:
            payload["limitingFactor"] = self.limiting_factor
        return payload
