"""
Catalog

Static vehicle models and the paint palette. Pure data plus lookups; no
Streamlit or infrastructure dependencies.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from domain.enums import ModelKey
from domain.errors import InvalidKey


# (length, height, width) of the painted body volume, in scene units
BodySize = tuple[float, float, float]


@dataclass(frozen=True)
class CatalogEntry:
    """
    A selectable vehicle model.

    Attributes:
        model_key: Stable identifier (e.g. ModelKey.SPORTS)
        display_name: Full model name shown in the builder
        price_cents: Base price in US cents
        horsepower: Power rating
        body_size: Chassis dimensions used by the scene composer
    """
    model_key: ModelKey
    display_name: str
    price_cents: int
    horsepower: int
    body_size: BodySize = (3.0, 1.0, 1.5)

    def __post_init__(self):
        if self.price_cents < 0:
            raise ValueError(f"price_cents must be >= 0, got {self.price_cents}")
        if self.horsepower < 0:
            raise ValueError(f"horsepower must be >= 0, got {self.horsepower}")

    @property
    def short_name(self) -> str:
        """First word of the display name (the make), used on model buttons."""
        return self.display_name.split(" ")[0]


@dataclass(frozen=True)
class PaintOption:
    """A paint color from the fixed palette."""
    display_name: str
    color_value: str


_ENTRIES = {
    ModelKey.SPORTS: CatalogEntry(
        ModelKey.SPORTS, "Porsche 911 GT3", 170_000_00, 502, (3.0, 1.0, 1.5)
    ),
    ModelKey.MUSCLE: CatalogEntry(
        ModelKey.MUSCLE, "Dodge Hellcat", 72_000_00, 797, (3.2, 1.05, 1.6)
    ),
    ModelKey.SUPERCAR: CatalogEntry(
        ModelKey.SUPERCAR, "Lamborghini Aventador", 420_000_00, 769, (3.1, 0.85, 1.6)
    ),
}

# Exhaustive over ModelKey; adding a member without an entry fails at import
_missing = [key for key in ModelKey if key not in _ENTRIES]
if _missing:
    raise RuntimeError(f"Catalog is missing entries for {_missing}")

CATALOG: Mapping[ModelKey, CatalogEntry] = MappingProxyType(
    {key: _ENTRIES[key] for key in ModelKey}
)

PALETTE: tuple[PaintOption, ...] = (
    PaintOption("Racing Red", "#ff3b30"),
    PaintOption("Midnight Black", "#1a1a1a"),
    PaintOption("Ocean Blue", "#007AFF"),
    PaintOption("Lime Green", "#32D74B"),
    PaintOption("Sunburst Yellow", "#FFD60A"),
    PaintOption("Pearl White", "#f8f9fa"),
)

_PALETTE_BY_VALUE = {p.color_value.lower(): p for p in PALETTE}


def first_entry() -> CatalogEntry:
    """First catalog entry in canonical order."""
    return next(iter(CATALOG.values()))


def first_paint() -> PaintOption:
    return PALETTE[0]


def get_entry(model_key: "ModelKey | str") -> CatalogEntry:
    """
    Look up a catalog entry.

    Args:
        model_key: A ModelKey or its string value

    Returns:
        The matching CatalogEntry

    Raises:
        InvalidKey: If the key is not in the catalog
    """
    try:
        return CATALOG[ModelKey.parse(model_key)]
    except ValueError as e:
        raise InvalidKey(f"Unknown model key {model_key!r}") from e


def find_paint(color_value: str) -> PaintOption:
    """
    Look up a palette entry by color value (case-insensitive).

    Raises:
        InvalidKey: If the color is not in the palette
    """
    paint = _PALETTE_BY_VALUE.get(str(color_value).lower())
    if paint is None:
        raise InvalidKey(f"Color {color_value!r} is not in the palette")
    return paint


def is_palette_color(color_value: str) -> bool:
    return str(color_value).lower() in _PALETTE_BY_VALUE
