"""
Garage Page

The signed-in user's saved builds. The list is loaded through GarageSync, so
it re-queries on sign-in or account switch and ignores late answers meant for
a previous account.
"""

import sys
import os

# Add the parent directory to the Python path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import asyncio
import json

import streamlit as st
import pandas as pd

from logging_config import setup_logging
from state.builder_state import discard_builder_config
from state.garage_state import get_garage_sync
from state.identity_state import get_identity_slot
from ui.formatters import build_summary_rows, build_title, format_price, paint_name

logger = setup_logging(__name__, log_file="garage.log")

CARDS_PER_ROW = 3


def render_build_card(build) -> None:
    entry = build.catalog_entry
    with st.container(border=True):
        st.markdown(
            f"<div style='height:120px;border-radius:12px;background-color:{build.color_value}'></div>",
            unsafe_allow_html=True,
        )
        st.markdown(f"**{entry.display_name}**")
        st.markdown(f"**Color:** {paint_name(build.color_value)}")
        st.markdown(f"**Price:** {format_price(entry.price_cents)}")
        st.download_button(
            "Export",
            data=json.dumps(build.to_document(build.owner_id), indent=2),
            file_name=f"nexdrive-{build.record_id}.json",
            mime="application/json",
            icon=":material/download:",
            key=f"export_{build.record_id}",
            use_container_width=True,
        )


discard_builder_config()
st.title("Your Garage")

slot = get_identity_slot()
sync = get_garage_sync()

if slot.is_resolving:
    st.caption("Loading...")
    st.stop()

if slot.principal is None:
    st.info("Sign in to see your saved builds.")
    st.stop()

asyncio.run(sync.pump())
garage = sync.state

if garage.error is not None:
    st.error(garage.error.user_message)
    if st.button("Retry", icon=":material/refresh:"):
        asyncio.run(sync.refresh())
        st.rerun()

if garage.builds is None:
    st.caption("Loading...")
elif garage.is_empty:
    st.markdown("No builds yet. Go create one!")
    if st.button("Open the builder", icon=":material/build:"):
        st.switch_page("pages/builder.py")
else:
    builds = list(garage.builds)
    for start in range(0, len(builds), CARDS_PER_ROW):
        row = builds[start:start + CARDS_PER_ROW]
        for col, build in zip(st.columns(CARDS_PER_ROW), row):
            with col:
                render_build_card(build)

    with st.expander("All builds"):
        st.dataframe(
            pd.DataFrame(build_summary_rows(builds)),
            hide_index=True,
            use_container_width=True,
        )
    logger.debug(f"Rendered {len(builds)} builds: {[build_title(b) for b in builds]}")
