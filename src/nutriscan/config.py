"""Application configuration."""

import json
import os

from pydantic_settings import BaseSettings, SettingsConfigDict

from nutriscan.domain.nutrients import NutrientTotals

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    default_activity_factor: float = 1.3
    custom_ingredients_json: str | None = None
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_custom_ingredients(raw: str | None) -> dict[str, NutrientTotals]:
    """Parse extra per-100 g catalog entries from a JSON object.

    Expected shape: ``{"ghee": {"fat": 99.5, "calories": 900}, ...}``.
    Missing channels are zero; entries that are not objects are ignored.
    """
    if raw is None or not raw.strip():
        return {}
    payload = json.loads(raw)
    if not isinstance(payload, dict):
        raise ValueError("Custom ingredients must be a JSON object")
    entries: dict[str, NutrientTotals] = {}
    for name, values in payload.items():
        if not isinstance(name, str) or not name.strip():
            continue
        if not isinstance(values, dict):
            continue
        entries[name] = NutrientTotals.from_mapping(values)
    return entries
