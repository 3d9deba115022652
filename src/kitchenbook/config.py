"""
Kitchenbook - Configuration and settings.

KitchenSettings is loaded from environment variables and an optional .env file.
"""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class KitchenSettings(BaseSettings):
    """
    Application settings.

    Supabase credentials are optional so the parser and CLI preview work
    without a backend configured.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Supabase
    supabase_url: str = ""
    supabase_anon_key: str = ""
    supabase_service_role_key: str = ""

    # Application
    kitchen_env: Literal["development", "staging", "production"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # Recipe import
    # "unlinked": recipe ingredients keep their parsed name/unit, inventory untouched
    # "linked": missing ingredients are created in inventory with zero stock
    ingredient_policy: Literal["linked", "unlinked"] = "unlinked"
    default_unit: str = "个"
    import_warning_preview: int = 5  # Warnings shown before "... N more"

    # Inventory
    expiring_within_days: int = 3
    quick_recipe_minutes: int = 30
    adjust_debounce_seconds: float = 0.5

    @property
    def has_supabase(self) -> bool:
        return bool(self.supabase_url and self.supabase_anon_key)


@lru_cache
def get_settings() -> KitchenSettings:
    """Get cached settings instance."""
    return KitchenSettings()


class _SettingsProxy:
    """Lazy proxy for settings to avoid loading .env at import time."""

    _instance: KitchenSettings | None = None

    def __getattr__(self, name: str):
        if self._instance is None:
            self._instance = get_settings()
        return getattr(self._instance, name)


settings = _SettingsProxy()
