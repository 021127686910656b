"""
Type Conversion Utilities for Domain Model Factories

Safe conversion helpers for building domain models from store documents
and pandas rows. Null values (None, NaN, pd.NA) map to defaults instead of
leaking into the models.

Usage:
    ```python
    from domain.converters import safe_str, safe_str_mapping

    owner = safe_str(doc.get("ownerId"))            # "" if null
    trims = safe_str_mapping(doc.get("trimSlots"))  # {} if null
    ```
"""

import json
from typing import Any, Mapping

import pandas as pd


def _is_null(value) -> bool:
    # pd.isna on containers returns an array; only scalars can be null here
    if isinstance(value, (dict, list, tuple)):
        return False
    return bool(pd.isna(value))


def safe_str(value, default: str = "") -> str:
    """
    Convert value to str, returning default if null.

    Examples:
        >>> safe_str("sports")
        'sports'
        >>> safe_str(None)
        ''
        >>> safe_str(pd.NA, default="N/A")
        'N/A'
    """
    if _is_null(value):
        return default
    return str(value)


def safe_str_mapping(value, default: Mapping[str, str] | None = None) -> dict[str, str]:
    """
    Convert a mapping (or its JSON text) to a ``{str: str}`` dict.

    Null or empty values give ``default`` (an empty dict if not given).
    Entries with a null key or value are dropped.

    Examples:
        >>> safe_str_mapping({"wheel": "Sport"})
        {'wheel': 'Sport'}
        >>> safe_str_mapping('{"spoiler": "Wing"}')
        {'spoiler': 'Wing'}
        >>> safe_str_mapping(None)
        {}
    """
    if _is_null(value) or value == "":
        return dict(default or {})
    if isinstance(value, (str, bytes)):
        value = json.loads(value)
    if not isinstance(value, Mapping):
        raise ValueError(f"Expected a mapping, got {type(value).__name__}")
    return {
        str(k): str(v)
        for k, v in value.items()
        if not _is_null(k) and not _is_null(v)
    }


def parse_document(value: Any) -> dict[str, Any]:
    """
    Parse a stored document body (JSON text or mapping) into a dict.

    Raises:
        ValueError: If the body is not a JSON object
    """
    if isinstance(value, (str, bytes)):
        value = json.loads(value)
    if not isinstance(value, Mapping):
        raise ValueError(f"Document body must be an object, got {type(value).__name__}")
    return dict(value)
