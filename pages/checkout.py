"""
Checkout Page

Placeholder; payment processing is not part of the configurator.
"""

import sys
import os

# Add the parent directory to the Python path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import streamlit as st

from state.builder_state import discard_builder_config

discard_builder_config()

st.title("Checkout Coming Soon")
st.caption("Saved builds stay in your garage until checkout opens.")
