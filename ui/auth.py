"""
Identity Adapter

Bridges Streamlit's OIDC login (st.login / st.user / st.logout) to the
session's IdentitySlot. This module is the slot's only writer.
"""

from typing import Any, Mapping, Optional

import streamlit as st

from domain.models import Principal
from logging_config import setup_logging
from state.identity_state import AuthStatus, IdentitySlot, get_identity_slot

logger = setup_logging(__name__, log_file="auth.log")


def principal_from_user(user_info: Mapping[str, Any]) -> Optional[Principal]:
    """
    Build a Principal from OIDC claims.

    Args:
        user_info: st.user (or any mapping with OIDC claims)

    Returns:
        A Principal, or None when nobody is logged in
    """
    if not user_info or not user_info.get("is_logged_in", False):
        return None
    principal_id = user_info.get("sub") or user_info.get("email")
    if not principal_id:
        logger.warning("Logged-in user has neither 'sub' nor 'email'; treating as signed out")
        return None
    return Principal(
        principal_id=str(principal_id),
        display_name=str(user_info.get("name") or ""),
        avatar_url=str(user_info.get("picture") or ""),
        email=str(user_info.get("email") or ""),
    )


def resolve_identity(slot: Optional[IdentitySlot] = None) -> Optional[Principal]:
    """Publish the current login state into the slot and return the principal.

    Call once at the top of every page run.
    """
    slot = slot or get_identity_slot()
    if slot.status is AuthStatus.UNINITIALIZED:
        slot.begin_resolution()
    try:
        user_info = st.user.to_dict()
    except Exception as e:
        # No [auth] section in secrets.toml: browse signed out
        logger.warning(f"Identity provider unavailable, treating as signed out: {e}")
        user_info = {}
    slot.publish(principal_from_user(user_info))
    return slot.principal


def render_auth_controls(slot: Optional[IdentitySlot] = None) -> None:
    """Sidebar block with the signed-in user or a sign-in button."""
    slot = slot or get_identity_slot()
    with st.sidebar.container(border=True):
        if slot.is_resolving:
            st.caption("Loading...")
            return
        principal = slot.principal
        if principal is None:
            if st.button("Sign in with Google", icon=":material/login:", use_container_width=True):
                st.login()
            return
        cols = st.columns([1, 3])
        if principal.avatar_url:
            cols[0].image(principal.avatar_url, width=40)
        cols[1].markdown(f"**{principal.first_name}**")
        if principal.email:
            st.caption(principal.email)
        if st.button("Logout", icon=":material/logout:", use_container_width=True):
            st.logout()
