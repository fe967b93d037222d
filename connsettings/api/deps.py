"""Shared FastAPI dependencies for API routers."""
from functools import lru_cache

from connsettings.store import ConnectionSettingsService, FileSettingsStore


@lru_cache(maxsize=1)
def get_settings_service() -> ConnectionSettingsService:
    return ConnectionSettingsService(FileSettingsStore())
