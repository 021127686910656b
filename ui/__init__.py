"""
UI Package

Presentation layer components for Streamlit pages: the identity adapter,
display formatting, and the Plotly renderer for scene graphs.

Page files stay focused on layout and user interaction.
"""

from ui.auth import principal_from_user, resolve_identity, render_auth_controls
from ui.formatters import (
    format_price,
    format_price_compact,
    format_horsepower,
    paint_name,
    build_title,
    build_summary_rows,
)
from ui.scene_renderer import build_figure

__all__ = [
    # Identity
    "principal_from_user",
    "resolve_identity",
    "render_auth_controls",
    # Formatters
    "format_price",
    "format_price_compact",
    "format_horsepower",
    "paint_name",
    "build_title",
    "build_summary_rows",
    # Renderer
    "build_figure",
]
