"""
Builder Page

Pick a model, paint and trims, see the car in 3D, save it to the garage.

Every widget change goes through a configuration_service transition; the
scene is recomposed from the resulting configuration on each run.
"""

import sys
import os

# Add the parent directory to the Python path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import asyncio

import streamlit as st

from domain import CATALOG, PALETTE, ConfiguratorError, TrimSlot, Unauthenticated
from logging_config import setup_logging
from services import compose, get_persistence_gateway, is_savable, select_color, select_model, select_trim
from state.builder_state import get_builder_config, set_builder_config
from state.garage_state import get_garage_sync
from state.identity_state import get_identity_slot
from ui.formatters import format_horsepower, format_price, paint_name
from ui.scene_renderer import build_figure

logger = setup_logging(__name__, log_file="builder.log")

# Options offered per trim slot; legality of trims is a UI concern
TRIM_OPTIONS = {
    TrimSlot.WHEEL: ["Classic", "Sport", "Turbine"],
    TrimSlot.SPOILER: ["None", "Lip", "Wing"],
    TrimSlot.INTERIOR: ["Black", "Tan", "Red"],
}


def save_build(config) -> None:
    """Save a snapshot of ``config`` for the principal signed in right now."""
    principal = get_identity_slot().principal
    if not is_savable(config, principal):
        st.warning(Unauthenticated.user_message)
        return
    try:
        record_id = asyncio.run(get_persistence_gateway().save(config, principal))
    except ConfiguratorError as e:
        logger.error(f"Save failed: {e}")
        st.error(f"Save failed: {e.user_message}")
        return
    get_garage_sync().state.invalidate()
    logger.info(f"Build {record_id} saved")
    st.success("Build saved! Check your Garage.")


config = get_builder_config()

left, right = st.columns(2, gap="large")

with right.container(border=True):
    st.header("Customize")

    model_key = st.segmented_control(
        "Model",
        options=list(CATALOG.keys()),
        format_func=lambda k: f"{CATALOG[k].short_name} · {format_horsepower(CATALOG[k])}",
        default=config.model_key,
        key="builder_model",
    )
    if model_key is not None and model_key != config.model_key:
        config = select_model(config, model_key)

    color_value = st.pills(
        "Paint",
        options=[p.color_value for p in PALETTE],
        format_func=paint_name,
        default=config.color_value,
        key="builder_paint",
    )
    if color_value is not None and color_value != config.color_value:
        config = select_color(config, color_value)

    for slot, options in TRIM_OPTIONS.items():
        current = config.trim(slot)
        choice = st.selectbox(
            slot.display_name,
            options=options,
            index=options.index(current) if current in options else 0,
            key=f"builder_trim_{slot.value}",
        )
        if choice != current:
            config = select_trim(config, slot, choice)

    set_builder_config(config)

    if st.button("Save to Garage", type="primary", use_container_width=True):
        save_build(config)

entry = config.catalog_entry
with left.container(border=True):
    st.subheader(entry.display_name)
    st.markdown(f"**{format_price(entry.price_cents)}** · {paint_name(config.color_value)}")
    st.plotly_chart(build_figure(compose(config, entry)), use_container_width=True)
