"""
Configuration Service

Pure transitions over the Configuration value. No Streamlit imports, no I/O.

Every transition replaces exactly one field with a value drawn from a fixed
domain and returns a new Configuration; the input is never modified.
"""

from typing import Optional

from domain.catalog import first_entry, first_paint, get_entry, find_paint
from domain.enums import ModelKey, TrimSlot
from domain.errors import InvalidKey
from domain.models import Configuration, Principal


def create_default() -> Configuration:
    """Baseline build: first catalog model, first paint, no trims, unsaved."""
    return Configuration(
        model_key=first_entry().model_key,
        color_value=first_paint().color_value,
        trim_slots={},
        owner_id="",
        record_id=None,
    )


def select_model(config: Configuration, model_key: "ModelKey | str") -> Configuration:
    """
    Replace the selected model.

    Raises:
        InvalidKey: If model_key is not in the catalog
    """
    entry = get_entry(model_key)
    return _replace(config, model_key=entry.model_key)


def select_color(config: Configuration, color_value: str) -> Configuration:
    """
    Replace the paint color.

    Raises:
        InvalidKey: If color_value is not a palette color
    """
    paint = find_paint(color_value)
    return _replace(config, color_value=paint.color_value)


def select_trim(
    config: Configuration, slot_name: "str | TrimSlot", option_value: str
) -> Configuration:
    """
    Set or overwrite one trim slot.

    Option legality is not checked here; only the slot name must be non-empty.

    Raises:
        InvalidKey: If slot_name is empty
    """
    name = slot_name.value if isinstance(slot_name, TrimSlot) else str(slot_name or "").strip()
    if not name:
        raise InvalidKey("Trim slot name must not be empty")
    trims = dict(config.trim_slots)
    trims[name] = str(option_value)
    return _replace(config, trim_slots=trims)


def is_savable(config: Configuration, principal: Optional[Principal]) -> bool:
    """True iff a principal is authenticated right now."""
    return principal is not None


def snapshot(config: Configuration) -> Configuration:
    """Detached copy of a configuration, handed to the persistence gateway."""
    return _replace(config)


def _replace(config: Configuration, **changes) -> Configuration:
    fields = {
        "model_key": config.model_key,
        "color_value": config.color_value,
        "trim_slots": dict(config.trim_slots),
        "owner_id": config.owner_id,
        "record_id": config.record_id,
    }
    fields.update(changes)
    return Configuration(**fields)
