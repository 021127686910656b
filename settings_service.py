"""Centralized settings loader for the application.

Infrastructure-level module: must not import from services/, repositories/,
config.py, or logging_config.py to avoid circular imports.
"""

import tomllib
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

SETTINGS_PATH = Path(__file__).resolve().parent / "settings.toml"
DEFAULT_STORE_TIMEOUT = 10.0
DEFAULT_BUILDS_COLLECTION = "builds"

_cached_settings: dict[Path, dict] = {}


def _load_settings(settings_path: Path = SETTINGS_PATH) -> dict:
    """Load and cache settings from the TOML file (one cache entry per path)."""
    settings_path = Path(settings_path)
    if settings_path in _cached_settings:
        return _cached_settings[settings_path]
    try:
        with open(settings_path, "rb") as f:
            settings = tomllib.load(f)
    except Exception as e:
        logger.error("Failed to load settings from %s: %s", settings_path, e)
        raise
    _cached_settings[settings_path] = settings
    return settings


def reset_settings_cache() -> None:
    """Drop cached settings so the next read hits the file again."""
    _cached_settings.clear()


class SettingsService:
    """Read-only accessor for application settings.

    Settings are cached at module level after the first read.
    """

    def __init__(self, settings_path: str | Path = SETTINGS_PATH):
        self.settings = _load_settings(Path(settings_path))

    @property
    def log_level(self) -> str:
        return self.settings["env"]["log_level"]

    @property
    def env(self) -> str:
        return self.settings["env"]["env"]

    @property
    def active_db_alias(self) -> str:
        """Database alias mapped to the current environment."""
        return self.settings["env_db_aliases"][self.env]

    @property
    def db_paths(self) -> dict[str, str]:
        return dict(self.settings["db_paths"])

    def turso_secret_key(self, alias: str) -> str:
        """Section name in secrets.toml holding Turso creds for an alias."""
        overrides = self.settings.get("db_turso_keys", {})
        return overrides.get(alias, f"{alias}_turso")

    @property
    def store_timeout(self) -> float:
        return float(self.settings.get("store", {}).get("timeout_seconds", DEFAULT_STORE_TIMEOUT))

    @property
    def builds_collection(self) -> str:
        return self.settings.get("store", {}).get("builds_collection", DEFAULT_BUILDS_COLLECTION)
