"""Domain models for daily intake tracking."""

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date, datetime
from uuid import UUID

from nutriscan.domain.nutrients import ZERO_TOTALS, NutrientTotals

# Field names written by the daily-summary store, camelCase and snake_case.
_SUMMARY_FIELDS = {
    "calories": ("totalCalories", "total_calories"),
    "protein": ("totalProtein", "total_protein"),
    "carbs": ("totalCarbs", "total_carbs"),
    "fat": ("totalFat", "total_fat"),
    "sugar": ("totalSugar", "total_sugar"),
    "sodium": ("totalSodium", "total_sodium"),
}


@dataclass(frozen=True)
class DailyIntake:
    """Snapshot of what a user has consumed on a given day."""

    day: date | None = None
    totals: NutrientTotals = ZERO_TOTALS

    @property
    def sugar_g(self) -> float:
        return self.totals.sugar_g

    @property
    def sodium_mg(self) -> float:
        return self.totals.sodium_mg

    @classmethod
    def from_summary(
        cls, summary: Mapping[str, object], day: date | None = None
    ) -> "DailyIntake":
        """Adapt a stored daily summary (``totalSugar`` etc.) to a snapshot."""
        values: dict[str, object] = {}
        for channel, keys in _SUMMARY_FIELDS.items():
            for key in keys:
                if summary.get(key) is not None:
                    values[channel] = summary[key]
                    break
        return cls(day=day, totals=NutrientTotals.from_mapping(values))

    def to_dict(self) -> dict[str, object]:
        return {
            "date": self.day.isoformat() if self.day else None,
            **self.totals.to_dict(),
        }


@dataclass(frozen=True)
class FoodLogEntry:
    """A food the user logged for a day."""

    name: str
    serving_g: float
    nutrients: NutrientTotals
    day: date
    id: UUID | None = None
    created_at: datetime | None = None

    def to_dict(self) -> dict[str, object]:
        return {
            "id": str(self.id) if self.id else None,
            "name": self.name,
            "servingSize": self.serving_g,
            "date": self.day.isoformat(),
            **self.nutrients.to_dict(),
        }
