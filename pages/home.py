"""
Home Page

Landing page with the sign-in state and a shortcut into the builder.
"""

import sys
import os

# Add the parent directory to the Python path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import streamlit as st

from domain import CATALOG
from state.builder_state import discard_builder_config
from state.identity_state import get_identity_slot
from ui.formatters import format_horsepower, format_price_compact

discard_builder_config()

st.title("NexDrive Pro")
st.subheader("Build & Save Your Dream Car in 3D")

slot = get_identity_slot()
principal = slot.principal
if slot.is_resolving:
    st.caption("Loading...")
elif principal is not None:
    st.markdown(f"Welcome back, **{principal.display_name or principal.email}**.")
else:
    st.markdown("Sign in from the sidebar to save builds to your garage.")

cols = st.columns(len(CATALOG))
for col, entry in zip(cols, CATALOG.values()):
    with col.container(border=True):
        st.markdown(f"**{entry.display_name}**")
        st.caption(f"{format_horsepower(entry)} · from {format_price_compact(entry.price_cents)}")

if st.button("Start Building", type="primary", icon=":material/build:"):
    st.switch_page("pages/builder.py")
