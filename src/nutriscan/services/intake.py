"""Daily intake logging service."""

import logging
from dataclasses import dataclass, replace
from datetime import date
from typing import Protocol
from uuid import UUID

from nutriscan.domain.errors import IntakeError
from nutriscan.domain.intake import DailyIntake, FoodLogEntry
from nutriscan.domain.nutrients import ZERO_TOTALS, NutrientTotals

_logger = logging.getLogger(__name__)


class IntakeRepository(Protocol):
    """Persistence interface for food logs and daily totals."""

    def create_entry(self, user_id: UUID, entry: FoodLogEntry) -> FoodLogEntry:
        """Persist a food log entry and return it with its id."""

    def get_entry(self, user_id: UUID, entry_id: UUID) -> FoodLogEntry | None:
        """Return a food log entry by id, if present."""

    def update_entry(self, user_id: UUID, entry: FoodLogEntry) -> None:
        """Replace serving size and nutrients of a stored entry."""

    def delete_entry(self, user_id: UUID, entry_id: UUID) -> None:
        """Delete a food log entry."""

    def list_entries(self, user_id: UUID, day: date) -> list[FoodLogEntry]:
        """Return the entries logged on a day."""

    def get_daily_totals(self, user_id: UUID, day: date) -> NutrientTotals | None:
        """Return the running totals for a day, if any were recorded."""

    def add_daily_totals(
        self, user_id: UUID, day: date, delta: NutrientTotals
    ) -> None:
        """Atomically add ``delta`` to the running totals for a day."""

    def list_daily_totals(self, user_id: UUID, limit: int) -> list[DailyIntake]:
        """Return recent daily totals, newest first."""


@dataclass
class IntakeService:
    """Keeps the food log and the per-day running totals consistent."""

    repository: IntakeRepository

    def log_food(self, user_id: UUID, entry: FoodLogEntry) -> FoodLogEntry:
        """Persist an entry and add it to the day's totals."""
        created = self.repository.create_entry(user_id, entry)
        self._apply(user_id, entry.day, entry.nutrients)
        _logger.info(
            "Food logged: user_id=%s day=%s calories=%s",
            user_id,
            entry.day,
            entry.nutrients.calories,
        )
        return created

    def delete_food(self, user_id: UUID, entry_id: UUID) -> None:
        """Remove an entry and subtract it from the day's totals."""
        entry = self._require_entry(user_id, entry_id)
        self.repository.delete_entry(user_id, entry_id)
        self._apply(user_id, entry.day, entry.nutrients.scaled(-1))

    def update_serving(
        self, user_id: UUID, entry_id: UUID, serving_g: float
    ) -> FoodLogEntry:
        """Rescale an entry to a new serving and apply the difference."""
        entry = self._require_entry(user_id, entry_id)
        if entry.serving_g <= 0 or serving_g <= 0:
            raise IntakeError("Serving sizes must be greater than 0")
        ratio = serving_g / entry.serving_g
        updated = replace(
            entry, serving_g=serving_g, nutrients=entry.nutrients.scaled(ratio)
        )
        self.repository.update_entry(user_id, updated)
        self._apply(user_id, entry.day, updated.nutrients - entry.nutrients)
        return updated

    def get_daily_intake(self, user_id: UUID, day: date) -> DailyIntake:
        """Return the day's totals, zero when nothing was logged."""
        totals = self.repository.get_daily_totals(user_id, day)
        return DailyIntake(day=day, totals=totals or ZERO_TOTALS)

    def list_entries(self, user_id: UUID, day: date) -> list[FoodLogEntry]:
        return self.repository.list_entries(user_id, day)

    def get_history(self, user_id: UUID, limit: int = 30) -> list[DailyIntake]:
        """Return recent daily totals, newest first."""
        return self.repository.list_daily_totals(user_id, limit)

    def _require_entry(self, user_id: UUID, entry_id: UUID) -> FoodLogEntry:
        entry = self.repository.get_entry(user_id, entry_id)
        if entry is None:
            raise IntakeError(f"Food log entry {entry_id} not found")
        return entry

    def _apply(self, user_id: UUID, day: date, delta: NutrientTotals) -> None:
        self.repository.add_daily_totals(user_id, day, delta)
