"""
Identity State

One observable identity slot per session. The identity adapter is the only
writer; every other component reads snapshots or subscribes.

Lifecycle: UNINITIALIZED -> RESOLVING -> RESOLVED(principal | None).
Any new sign-in/sign-out goes back through RESOLVING until the provider
answers. Nothing may save or list builds unless the slot is RESOLVED.
"""

from enum import Enum, auto
from typing import Callable, Optional

from domain.models import Principal
from logging_config import setup_logging

logger = setup_logging(__name__, log_file="identity_state.log")

IdentityListener = Callable[[Optional[Principal]], None]


class AuthStatus(Enum):
    UNINITIALIZED = auto()
    RESOLVING = auto()
    RESOLVED = auto()


class IdentitySlot:
    """Holds the current principal and fans out changes to subscribers."""

    def __init__(self):
        self._status = AuthStatus.UNINITIALIZED
        self._principal: Optional[Principal] = None
        self._listeners: list[IdentityListener] = []

    @property
    def status(self) -> AuthStatus:
        return self._status

    @property
    def is_resolving(self) -> bool:
        """True until the provider has answered at least once after a change."""
        return self._status is not AuthStatus.RESOLVED

    @property
    def principal(self) -> Optional[Principal]:
        """Snapshot of the current principal; None while resolving or signed out."""
        if self._status is not AuthStatus.RESOLVED:
            return None
        return self._principal

    def begin_resolution(self) -> None:
        """Mark that the provider is working out who the user is."""
        self._status = AuthStatus.RESOLVING

    def publish(self, principal: Optional[Principal]) -> None:
        """Record the provider's answer and notify subscribers.

        Subscribers are notified only when the resolved principal changes,
        or on the first answer.
        """
        first = self._status is not AuthStatus.RESOLVED
        changed = _principal_id(principal) != _principal_id(self._principal)
        self._principal = principal
        self._status = AuthStatus.RESOLVED
        if not (first or changed):
            return
        logger.info(f"Identity resolved: {_principal_id(principal) or 'signed out'}")
        for listener in list(self._listeners):
            listener(principal)

    def subscribe(self, listener: IdentityListener) -> Callable[[], None]:
        """Register ``listener``; returns a function that unsubscribes it.

        A listener added after resolution is called once with the current
        principal.
        """
        self._listeners.append(listener)
        if self._status is AuthStatus.RESOLVED:
            listener(self._principal)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe


def _principal_id(principal: Optional[Principal]) -> Optional[str]:
    return principal.principal_id if principal is not None else None


def get_identity_slot() -> IdentitySlot:
    """The session's identity slot."""
    from state.service_registry import get_service
    return get_service("identity_slot", IdentitySlot)
