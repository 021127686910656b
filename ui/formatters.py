"""
UI Formatting Utilities

Display helpers for Streamlit pages. Prices stay integer cents everywhere
else; this is the only place they become dollars.
"""

from millify import millify

from domain.catalog import CatalogEntry, is_palette_color, find_paint
from domain.models import Configuration, SavedBuild


def format_price(price_cents: int) -> str:
    """
    Format a price in cents as whole dollars with thousands separators.

    Examples:
        >>> format_price(170_000_00)
        '$170,000'
        >>> format_price(1_99)
        '$1.99'
    """
    if price_cents is None:
        return "N/A"
    dollars, cents = divmod(int(price_cents), 100)
    if cents:
        return f"${dollars:,}.{cents:02d}"
    return f"${dollars:,}"


def format_price_compact(price_cents: int, precision: int = 1) -> str:
    """
    Format a price with millify notation (e.g. "$170k", "$1.2M").
    """
    if not price_cents:
        return "N/A"
    return "$" + millify(price_cents / 100, precision=precision)


def format_horsepower(entry: CatalogEntry) -> str:
    return f"{entry.horsepower} HP"


def paint_name(color_value: str) -> str:
    """Palette display name for a color value, or the raw value if unknown."""
    if not is_palette_color(color_value):
        return color_value
    return find_paint(color_value).display_name


def build_title(config: Configuration) -> str:
    """Short card title, e.g. "Porsche 911 GT3 in Racing Red"."""
    return f"{config.catalog_entry.display_name} in {config.paint.display_name}"


def build_summary_rows(builds: list[SavedBuild]) -> list[dict]:
    """Flatten saved builds into rows for a Streamlit dataframe."""
    rows = []
    for build in builds:
        entry = build.catalog_entry
        rows.append(
            {
                "Model": entry.display_name,
                "Color": paint_name(build.color_value),
                "Wheel": build.trim("wheel"),
                "Spoiler": build.trim("spoiler"),
                "Interior": build.trim("interior"),
                "Price": format_price(entry.price_cents),
                "Record": build.record_id,
            }
        )
    return rows
