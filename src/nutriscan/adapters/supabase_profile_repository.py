"""Supabase-backed profile repository."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from nutriscan.domain.nutrients import NutrientBudget, NutrientLimits
from nutriscan.domain.profiles import Gender, UserProfile, parse_diseases
from nutriscan.services.profiles import ProfileRepository


@dataclass
class SupabaseProfileRepository(ProfileRepository):
    """Supabase implementation for user profiles."""

    client: Client

    def get_profile(self, user_id: UUID) -> UserProfile | None:
        """Return the profile row for a user, if present."""
        response = (
            self.client.table("user_profiles")
            .select("*")
            .eq("user_id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_profile(response.data[0])

    def save_profile(self, user_id: UUID, profile: UserProfile) -> None:
        """Upsert the profile row for a user."""
        payload = profile.to_dict()
        self.client.table("user_profiles").upsert(
            {
                "user_id": str(user_id),
                "name": payload["name"],
                "age": payload["age"],
                "height": payload["height"],
                "weight": payload["weight"],
                "gender": payload["gender"],
                "diseases": payload["diseases"],
                "bmi": payload["bmi"],
                "custom_limits": payload["customLimits"],
                "daily_nutrition_goals": payload["dailyNutritionGoals"],
                "updated_at": datetime.now(tz=UTC).isoformat(),
            },
            on_conflict="user_id",
        ).execute()


def _parse_profile(row: dict[str, object]) -> UserProfile:
    custom_limits = row.get("custom_limits")
    goals = row.get("daily_nutrition_goals")
    diseases = row.get("diseases")
    return UserProfile(
        age=_optional_int(row.get("age")),
        height_cm=_optional_float(row.get("height")),
        weight_kg=_optional_float(row.get("weight")),
        gender=Gender.parse(row.get("gender")),
        diseases=parse_diseases(
            diseases if isinstance(diseases, list) else None, strict=False
        ),
        custom_limits=(
            NutrientLimits.from_mapping(custom_limits)
            if isinstance(custom_limits, dict)
            else None
        ),
        daily_nutrition_goals=(
            NutrientBudget.from_mapping(goals) if isinstance(goals, dict) else None
        ),
        bmi=_optional_float(row.get("bmi")),
        name=row.get("name") if isinstance(row.get("name"), str) else None,
    )


def _optional_float(value: object) -> float | None:
    if isinstance(value, int | float):
        return float(value)
    return None


def _optional_int(value: object) -> int | None:
    if isinstance(value, int | float):
        return int(value)
    return None
