"""Profile onboarding and editing."""

import logging
from dataclasses import dataclass, field, replace
from typing import Protocol
from uuid import UUID

from nutriscan.domain.errors import ProfileNotFoundError, ProfileValidationError
from nutriscan.domain.nutrients import NutrientLimits
from nutriscan.domain.profiles import Disease, Gender, UserProfile
from nutriscan.services.goals import (
    DEFAULT_ACTIVITY_FACTOR,
    ActivityLevel,
    calculate_bmi,
    calculate_daily_nutrition_goals,
)

_logger = logging.getLogger(__name__)


class ProfileRepository(Protocol):
    """Persistence interface for user profiles."""

    def get_profile(self, user_id: UUID) -> UserProfile | None:
        """Return the profile for a user, if present."""

    def save_profile(self, user_id: UUID, profile: UserProfile) -> None:
        """Create or replace the profile for a user."""


@dataclass(frozen=True)
class ProfileInput:
    """Body metrics and conditions entered during onboarding or editing."""

    age: int
    height_cm: float
    weight_kg: float
    gender: Gender = Gender.UNSPECIFIED
    diseases: frozenset[Disease] = field(default_factory=frozenset)
    name: str | None = None
    activity_level: ActivityLevel | None = None


@dataclass
class ProfileService:
    """Application service that keeps BMI and goals in sync with metrics."""

    repository: ProfileRepository
    activity_factor: float = DEFAULT_ACTIVITY_FACTOR

    def get_profile(self, user_id: UUID) -> UserProfile | None:
        """Return the stored profile, if any."""
        return self.repository.get_profile(user_id)

    def complete_onboarding(self, user_id: UUID, data: ProfileInput) -> UserProfile:
        """Create the profile with BMI and computed daily goals."""
        profile = self._build_profile(data)
        self.repository.save_profile(user_id, profile)
        _logger.info("Profile created: user_id=%s bmi=%s", user_id, profile.bmi)
        return profile

    def update_profile(self, user_id: UUID, data: ProfileInput) -> UserProfile:
        """Apply edited metrics, recomputing BMI, goals and custom limits."""
        existing = self.repository.get_profile(user_id)
        if existing is None:
            raise ProfileNotFoundError(f"No profile for user {user_id}")
        rebuilt = self._build_profile(data)
        profile = replace(
            rebuilt,
            custom_limits=NutrientLimits.from_budget(rebuilt.daily_nutrition_goals),
            name=data.name or existing.name,
        )
        self.repository.save_profile(user_id, profile)
        _logger.info("Profile updated: user_id=%s bmi=%s", user_id, profile.bmi)
        return profile

    def _build_profile(self, data: ProfileInput) -> UserProfile:
        _validate_metrics(data)
        factor = (
            data.activity_level.factor if data.activity_level else self.activity_factor
        )
        goals = calculate_daily_nutrition_goals(
            data.weight_kg,
            data.height_cm,
            data.age,
            data.gender,
            Disease.HYPERTENSION in data.diseases,
            activity_factor=factor,
        )
        return UserProfile(
            age=data.age,
            height_cm=data.height_cm,
            weight_kg=data.weight_kg,
            gender=data.gender,
            diseases=data.diseases,
            daily_nutrition_goals=goals,
            bmi=calculate_bmi(data.weight_kg, data.height_cm),
            name=data.name,
        )


def _validate_metrics(data: ProfileInput) -> None:
    for label, value in (
        ("age", data.age),
        ("height", data.height_cm),
        ("weight", data.weight_kg),
    ):
        if value <= 0:
            raise ProfileValidationError(f"{label.capitalize()} must be positive")
