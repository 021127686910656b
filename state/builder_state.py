"""
Builder Session State

The configuration being built in the current session. It exists only while
the builder page is in use: entering the builder creates the default, leaving
for another page without saving discards it.
"""

from domain.models import Configuration
from services.configuration_service import create_default
from state.session_state import ss_clear, ss_get, ss_set

BUILDER_CONFIG_KEY = "builder_config"


def get_builder_config() -> Configuration:
    """Return the session's configuration, creating the default on first use."""
    config = ss_get(BUILDER_CONFIG_KEY)
    if config is None:
        config = create_default()
        ss_set(BUILDER_CONFIG_KEY, config)
    return config


def set_builder_config(config: Configuration) -> None:
    ss_set(BUILDER_CONFIG_KEY, config)


def discard_builder_config() -> None:
    """Forget the in-progress configuration (user left the builder)."""
    ss_clear(BUILDER_CONFIG_KEY)
