"""Supabase repository for food logs and daily intake totals."""

from dataclasses import dataclass
from datetime import UTC, date, datetime
from uuid import UUID

from supabase import Client

from nutriscan.domain.intake import DailyIntake, FoodLogEntry
from nutriscan.domain.nutrients import NutrientTotals
from nutriscan.services.intake import IntakeRepository

ADD_DAILY_INTAKE_FUNCTION = "add_daily_intake"


@dataclass
class SupabaseIntakeRepository(IntakeRepository):
    """Supabase implementation for intake logging."""

    client: Client

    def create_entry(self, user_id: UUID, entry: FoodLogEntry) -> FoodLogEntry:
        """Insert a food log row and return the stored entry."""
        response = (
            self.client.table("food_logs")
            .insert(
                {
                    "user_id": str(user_id),
                    "name": entry.name,
                    "serving_size": entry.serving_g,
                    "date": entry.day.isoformat(),
                    "created_at": datetime.now(tz=UTC).isoformat(),
                    **entry.nutrients.to_dict(),
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create food log entry")
        return _parse_entry(response.data[0])

    def get_entry(self, user_id: UUID, entry_id: UUID) -> FoodLogEntry | None:
        """Return a food log entry by id."""
        response = (
            self.client.table("food_logs")
            .select("*")
            .eq("user_id", str(user_id))
            .eq("id", str(entry_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_entry(response.data[0])

    def update_entry(self, user_id: UUID, entry: FoodLogEntry) -> None:
        """Update serving size and nutrients of an entry."""
        self.client.table("food_logs").update(
            {"serving_size": entry.serving_g, **entry.nutrients.to_dict()}
        ).eq("user_id", str(user_id)).eq("id", str(entry.id)).execute()

    def delete_entry(self, user_id: UUID, entry_id: UUID) -> None:
        """Delete a food log entry."""
        self.client.table("food_logs").delete().eq("user_id", str(user_id)).eq(
            "id", str(entry_id)
        ).execute()

    def list_entries(self, user_id: UUID, day: date) -> list[FoodLogEntry]:
        """Return entries for a day in logging order."""
        response = (
            self.client.table("food_logs")
            .select("*")
            .eq("user_id", str(user_id))
            .eq("date", day.isoformat())
            .order("created_at", desc=False)
            .execute()
        )
        return [_parse_entry(row) for row in response.data or []]

    def get_daily_totals(self, user_id: UUID, day: date) -> NutrientTotals | None:
        """Return the stored running totals for a day."""
        response = (
            self.client.table("daily_intake")
            .select("*")
            .eq("user_id", str(user_id))
            .eq("date", day.isoformat())
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return DailyIntake.from_summary(response.data[0], day).totals

    def add_daily_totals(
        self, user_id: UUID, day: date, delta: NutrientTotals
    ) -> None:
        """Increment the running totals for a day in a single statement.

        ``add_daily_intake`` inserts the row or adds to each ``total_*``
        column with ``on conflict (user_id, date) do update``.
        """
        self.client.rpc(
            ADD_DAILY_INTAKE_FUNCTION,
            {
                "p_user_id": str(user_id),
                "p_date": day.isoformat(),
                "p_calories": delta.calories,
                "p_protein": delta.protein_g,
                "p_carbs": delta.carbs_g,
                "p_fat": delta.fat_g,
                "p_sugar": delta.sugar_g,
                "p_sodium": delta.sodium_mg,
            },
        ).execute()

    def list_daily_totals(self, user_id: UUID, limit: int) -> list[DailyIntake]:
        """Return recent daily totals, newest first."""
        response = (
            self.client.table("daily_intake")
            .select("*")
            .eq("user_id", str(user_id))
            .order("date", desc=True)
            .limit(limit)
            .execute()
        )
        return [
            DailyIntake.from_summary(row, _parse_date(row.get("date")))
            for row in response.data or []
        ]


def _parse_entry(row: dict[str, object]) -> FoodLogEntry:
    created_raw = row.get("created_at")
    entry_id = row.get("id")
    return FoodLogEntry(
        id=UUID(str(entry_id)) if entry_id else None,
        name=str(row.get("name") or ""),
        serving_g=float(row.get("serving_size") or 0.0),
        nutrients=NutrientTotals.from_mapping(row),
        day=_parse_date(row.get("date")) or date.min,
        created_at=(
            datetime.fromisoformat(created_raw)
            if isinstance(created_raw, str) and created_raw
            else None
        ),
    )


def _parse_date(value: object) -> date | None:
    if isinstance(value, str) and value:
        return date.fromisoformat(value[:10])
    return None
