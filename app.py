"""
NexDrive Pro

Streamlit entry point. Resolves the signed-in user once per run, draws the
sidebar auth controls and hands over to the selected page.

Run with:
    streamlit run app.py
"""

import streamlit as st

from logging_config import setup_logging
from ui.auth import resolve_identity, render_auth_controls

logger = setup_logging(__name__)

st.set_page_config(page_title="NexDrive Pro", page_icon="🏎️", layout="wide")

resolve_identity()

pages = [
    st.Page("pages/home.py", title="Home", icon=":material/home:", default=True),
    st.Page("pages/builder.py", title="Build", icon=":material/directions_car:"),
    st.Page("pages/garage.py", title="Garage", icon=":material/garage:"),
    st.Page("pages/checkout.py", title="Cart", icon=":material/shopping_cart:"),
]
pg = st.navigation(pages)
render_auth_controls()
pg.run()
