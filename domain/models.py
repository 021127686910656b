"""
Domain Models

Dataclasses for the configurator's core entities: the in-progress
Configuration, its persisted projection SavedBuild, and the authenticated
Principal handed over by the identity provider.

Design Principles:
1. Immutability (frozen=True) - transitions return new instances
2. Factory methods - Clean construction from store documents
3. Closed domains - model_key is a ModelKey, color_value a palette value
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Optional

from domain.catalog import CatalogEntry, PaintOption, find_paint, get_entry
from domain.converters import safe_str, safe_str_mapping
from domain.enums import ModelKey, TrimSlot, NO_TRIM


# Type aliases for clarity
RecordID = str
PrincipalID = str

# Persisted document field names (builds collection)
DOC_MODEL_KEY = "modelKey"
DOC_COLOR_VALUE = "colorValue"
DOC_TRIM_SLOTS = "trimSlots"
DOC_OWNER_ID = "ownerId"


def _frozen_trims(trims: Optional[Mapping[str, str]]) -> Mapping[str, str]:
    return MappingProxyType(dict(trims or {}))


# =============================================================================
# Principal - authenticated identity
# =============================================================================

@dataclass(frozen=True)
class Principal:
    """
    An authenticated identity as reported by the identity provider.

    Attributes:
        principal_id: Opaque, stable identifier (OIDC ``sub``)
        display_name: Full name
        avatar_url: Profile picture URL (may be empty)
        email: Email address (may be empty)
    """
    principal_id: PrincipalID
    display_name: str = ""
    avatar_url: str = ""
    email: str = ""

    @property
    def first_name(self) -> str:
        """First word of the display name, for compact headers."""
        parts = self.display_name.split()
        return parts[0] if parts else self.email


# =============================================================================
# Configuration - the build in progress
# =============================================================================

@dataclass(frozen=True)
class Configuration:
    """
    What the user is currently building.

    model_key and color_value are checked against the catalog on construction,
    so an out-of-domain Configuration cannot exist. Edit it through the
    services.configuration_service transitions.

    Raises:
        InvalidKey: If model_key or color_value is outside its fixed domain

    Attributes:
        model_key: Selected catalog model
        color_value: Selected paint, a palette color value
        trim_slots: Selected trim option per slot name
        owner_id: Principal id, empty until saved
        record_id: Store-assigned id, None while unsaved
    """
    model_key: ModelKey
    color_value: str
    trim_slots: Mapping[str, str] = field(default_factory=dict)
    owner_id: PrincipalID = ""
    record_id: Optional[RecordID] = None

    def __post_init__(self):
        # Keys are normalized to their canonical catalog/palette values
        object.__setattr__(self, "model_key", get_entry(self.model_key).model_key)
        object.__setattr__(self, "color_value", find_paint(self.color_value).color_value)
        object.__setattr__(self, "trim_slots", _frozen_trims(self.trim_slots))

    def trim(self, slot_name: "str | TrimSlot") -> str:
        """Selected option for a slot, or the slot's baseline if unset."""
        name = slot_name.value if isinstance(slot_name, TrimSlot) else slot_name
        if name in self.trim_slots:
            return self.trim_slots[name]
        try:
            return TrimSlot(name).baseline
        except ValueError:
            return NO_TRIM

    @property
    def catalog_entry(self) -> CatalogEntry:
        return get_entry(self.model_key)

    @property
    def paint(self) -> PaintOption:
        return find_paint(self.color_value)

    @property
    def price_cents(self) -> int:
        return self.catalog_entry.price_cents

    def to_document(self, owner_id: PrincipalID) -> dict[str, Any]:
        """Serialize into the builds-collection document shape."""
        return {
            DOC_MODEL_KEY: self.model_key.value,
            DOC_COLOR_VALUE: self.color_value,
            DOC_TRIM_SLOTS: dict(self.trim_slots),
            DOC_OWNER_ID: owner_id,
        }


# =============================================================================
# SavedBuild - persisted projection of a Configuration
# =============================================================================

@dataclass(frozen=True)
class SavedBuild(Configuration):
    """
    A Configuration as stored in the garage. Read-only.

    record_id and owner_id are always set.
    """

    def __post_init__(self):
        super().__post_init__()
        if not self.record_id:
            raise ValueError("SavedBuild requires a record_id")
        if not self.owner_id:
            raise ValueError("SavedBuild requires an owner_id")

    @classmethod
    def from_document(cls, record_id: RecordID, document: Mapping[str, Any]) -> "SavedBuild":
        """
        Factory method to re-hydrate a build from a store document.

        The model key and color are checked against the catalog, so a stored
        document can never produce a dangling key.

        Args:
            record_id: Store-assigned identifier
            document: Document body from the builds collection

        Returns:
            A new SavedBuild instance

        Raises:
            InvalidKey: If the document references an unknown model or color
            ValueError: If record_id or ownerId is missing
        """
        entry = get_entry(safe_str(document.get(DOC_MODEL_KEY)))
        paint = find_paint(safe_str(document.get(DOC_COLOR_VALUE)))
        return cls(
            model_key=entry.model_key,
            color_value=paint.color_value,
            trim_slots=safe_str_mapping(document.get(DOC_TRIM_SLOTS)),
            owner_id=safe_str(document.get(DOC_OWNER_ID)),
            record_id=safe_str(record_id),
        )

