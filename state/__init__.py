"""
State Management Module

Presentation-layer state for Streamlit sessions:
- Session state utilities (ss_get, ss_set, ss_clear)
- Service registry for per-session singletons (get_service)
- Identity slot (IdentitySlot, AuthStatus)
- Garage list state with stale-response protection (GarageState, GarageSync)

Usage:
    from state import ss_get, ss_set
    from state import get_service
"""

from state.session_state import ss_get, ss_set, ss_clear
from state.service_registry import get_service
from state.identity_state import AuthStatus, IdentitySlot, get_identity_slot
from state.garage_state import GarageState, GarageSync, QueryTicket, get_garage_sync

__all__ = [
    # Session state utilities
    'ss_get',
    'ss_set',
    'ss_clear',
    # Service registry
    'get_service',
    # Identity
    'AuthStatus',
    'IdentitySlot',
    'get_identity_slot',
    # Garage
    'GarageState',
    'GarageSync',
    'QueryTicket',
    'get_garage_sync',
]
