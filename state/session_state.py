"""
Session State Utilities

Thin helpers over Streamlit's session state. Pages and the state package use
these instead of touching st.session_state directly.
"""

import streamlit as st
from typing import TypeVar, Any, Optional

T = TypeVar('T')


def ss_get(key: str, default: T = None) -> Optional[T]:
    """Get value from session_state if it exists and is not None, else default."""
    if key in st.session_state:
        val = st.session_state[key]
        if val is not None:
            return val
    return default


def ss_set(key: str, value: Any) -> None:
    st.session_state[key] = value


def ss_clear(*keys: str) -> None:
    """Remove the given keys from session_state; unknown keys are ignored."""
    for key in keys:
        if key in st.session_state:
            del st.session_state[key]
