from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
import streamlit as st
import threading
from contextlib import suppress

from logging_config import setup_logging
from settings_service import SettingsService

logger = setup_logging(__name__)

# Engines are shared per database URL so every repository instance
# reuses one pool per file/remote
_ENGINE_LOCK = threading.Lock()


def _read_turso_secret(secret_key: str) -> tuple[str | None, str | None]:
    """Return (url, token) for a secrets.toml section, or (None, None)."""
    try:
        section = st.secrets[secret_key]
        return section.url, section.token
    except (KeyError, AttributeError, FileNotFoundError):
        # Not every alias has Turso credentials (local development)
        return None, None


class DatabaseConfig:
    """Connection settings and shared engines for one database alias.

    The document store writes to the Turso replica when credentials exist
    for the alias, otherwise to the local SQLite file.
    """

    _engines: dict[str, Engine] = {}
    _remote_engines: dict[str, Engine] = {}

    def __init__(
        self,
        alias: str,
        path: str,
        turso_url: str | None = None,
        token: str | None = None,
    ):
        self.alias = alias
        self.path = path
        self.url = f"sqlite:///{path}"
        self.turso_url = turso_url
        self.token = token

    @classmethod
    def from_settings(cls, alias: str | None = None) -> "DatabaseConfig":
        """Build a config for ``alias`` (default: the active environment's alias)."""
        settings = SettingsService()
        alias = alias or settings.active_db_alias
        db_paths = settings.db_paths
        if alias not in db_paths:
            raise ValueError(
                f"Unknown database alias '{alias}'. "
                f"Available: {list(db_paths.keys())}"
            )
        turso_url, token = _read_turso_secret(settings.turso_secret_key(alias))
        return cls(alias, db_paths[alias], turso_url=turso_url, token=token)

    @property
    def has_remote(self) -> bool:
        return bool(self.turso_url and self.token)

    @property
    def engine(self) -> Engine:
        """SQLAlchemy engine for the local file."""
        with _ENGINE_LOCK:
            eng = DatabaseConfig._engines.get(self.url)
            if eng is None:
                eng = create_engine(
                    self.url,
                    connect_args={"check_same_thread": False},
                )
                DatabaseConfig._engines[self.url] = eng
            return eng

    @property
    def remote_engine(self) -> Engine:
        """SQLAlchemy engine for the Turso database (sqlite+libsql dialect)."""
        if not self.has_remote:
            raise ValueError(
                f"No Turso credentials for alias '{self.alias}'. "
                f"Add a [{self.alias}_turso] section to .streamlit/secrets.toml"
            )
        with _ENGINE_LOCK:
            eng = DatabaseConfig._remote_engines.get(self.alias)
            if eng is None:
                eng = create_engine(
                    f"sqlite+{self.turso_url}?secure=true",
                    connect_args={"auth_token": self.token},
                )
                DatabaseConfig._remote_engines[self.alias] = eng
            return eng

    @property
    def store_engine(self) -> Engine:
        """Engine the document store talks to."""
        return self.remote_engine if self.has_remote else self.engine

    def dispose(self) -> None:
        """Dispose any shared engines held for this alias."""
        eng = DatabaseConfig._engines.pop(self.url, None)
        if eng is not None:
            with suppress(Exception):
                eng.dispose()
        remote = DatabaseConfig._remote_engines.pop(self.alias, None)
        if remote is not None:
            with suppress(Exception):
                remote.dispose()

    def ping(self) -> bool:
        """Run a trivial query against the store engine."""
        try:
            with self.store_engine.connect() as conn:
                conn.execute(text("SELECT 1")).fetchone()
            return True
        except Exception as e:
            logger.error(f"Store ping failed ({self.alias}): {e}")
            return False


if __name__ == "__main__":
    pass
