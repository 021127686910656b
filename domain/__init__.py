"""
Domain Models Package

Core domain types for the configurator. No Streamlit or database
dependencies live here.

Key Components:
- Enums: ModelKey, TrimSlot
- Catalog: CatalogEntry, PaintOption, CATALOG, PALETTE and lookups
- Models: Configuration, SavedBuild, Principal
- Errors: InvalidKey, Unauthenticated, StoreUnavailable, StoreTimeout
"""

from domain.enums import ModelKey, TrimSlot, NO_TRIM
from domain.errors import (
    ConfiguratorError,
    InvalidKey,
    Unauthenticated,
    StoreUnavailable,
    StoreTimeout,
    STORE_ERRORS,
)
from domain.catalog import (
    CatalogEntry,
    PaintOption,
    CATALOG,
    PALETTE,
    get_entry,
    find_paint,
    first_entry,
    first_paint,
)
from domain.models import Configuration, SavedBuild, Principal

__all__ = [
    # Enums
    "ModelKey",
    "TrimSlot",
    "NO_TRIM",
    # Errors
    "ConfiguratorError",
    "InvalidKey",
    "Unauthenticated",
    "StoreUnavailable",
    "StoreTimeout",
    "STORE_ERRORS",
    # Catalog
    "CatalogEntry",
    "PaintOption",
    "CATALOG",
    "PALETTE",
    "get_entry",
    "find_paint",
    "first_entry",
    "first_paint",
    # Models
    "Configuration",
    "SavedBuild",
    "Principal",
]
