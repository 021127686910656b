"""
Garage State

UI-facing state for the gallery of saved builds, and the controller that keeps
it in step with the identity slot.

Every query carries a ticket naming the generation and principal it was issued
for. Results and failures for any other ticket are dropped, so a slow response
for a previous user can never replace the current user's list.

``builds is None`` means "not loaded"; an empty tuple means "confirmed no
builds". A failed query keeps whatever was shown before and sets ``error``.
"""

import asyncio
from dataclasses import dataclass
from typing import Optional

from domain.errors import STORE_ERRORS, ConfiguratorError
from domain.models import Principal, PrincipalID, SavedBuild
from logging_config import setup_logging
from state.identity_state import IdentitySlot

logger = setup_logging(__name__, log_file="garage_state.log")


@dataclass(frozen=True)
class QueryTicket:
    generation: int
    principal_id: PrincipalID


class GarageState:
    """List state for one session's garage view."""

    def __init__(self):
        self.generation = 0
        self.principal_id: Optional[PrincipalID] = None
        self.builds: Optional[tuple[SavedBuild, ...]] = None
        self.error: Optional[ConfiguratorError] = None
        self.loading = False
        self.stale = False
        self._pending: Optional[QueryTicket] = None

    @property
    def is_empty(self) -> bool:
        """True only when a query confirmed there are no builds."""
        return self.builds is not None and len(self.builds) == 0

    def observe_principal(self, principal: Optional[Principal]) -> Optional[QueryTicket]:
        """React to a resolved principal.

        Returns a ticket when a query must be issued (sign-in, principal switch,
        or a stale list for the same principal), otherwise None.
        """
        new_id = principal.principal_id if principal is not None else None

        if new_id is None:
            if self.principal_id is not None or self.loading:
                self._reset(None)
            return None

        if new_id == self.principal_id and not self.stale:
            if self.loading or self.builds is not None:
                return None

        if new_id != self.principal_id:
            self._reset(new_id)
        return self.begin_query()

    def begin_query(self) -> QueryTicket:
        """Start a query for the current principal and return its ticket."""
        if self.principal_id is None:
            raise RuntimeError("Cannot query the garage without a principal")
        self.generation += 1
        self.loading = True
        self.stale = False
        self._pending = QueryTicket(self.generation, self.principal_id)
        return self._pending

    def take_pending(self) -> Optional[QueryTicket]:
        """Pop the ticket of a query that was requested but not started yet."""
        ticket, self._pending = self._pending, None
        if ticket is not None and not self.is_current(ticket):
            return None
        return ticket

    def is_current(self, ticket: QueryTicket) -> bool:
        return (
            ticket.generation == self.generation
            and ticket.principal_id == self.principal_id
        )

    def apply_result(self, ticket: QueryTicket, builds: list[SavedBuild]) -> bool:
        """Store a query result; returns False if the ticket is stale."""
        if not self.is_current(ticket):
            logger.info(
                f"Dropping stale garage result for {ticket.principal_id} "
                f"(generation {ticket.generation}, current {self.generation})"
            )
            return False
        self.builds = tuple(builds)
        self.error = None
        self.loading = False
        return True

    def apply_failure(self, ticket: QueryTicket, error: ConfiguratorError) -> bool:
        """Record a failed query, keeping prior builds visible."""
        if not self.is_current(ticket):
            logger.info(f"Dropping stale garage failure for {ticket.principal_id}")
            return False
        self.error = error
        self.loading = False
        return True

    def invalidate(self) -> None:
        """Mark the list out of date (e.g. after a save) without clearing it."""
        self.stale = True

    def _reset(self, principal_id: Optional[PrincipalID]) -> None:
        # Bumping the generation orphans any in-flight query
        self.generation += 1
        self.principal_id = principal_id
        self.builds = None
        self.error = None
        self.loading = False
        self.stale = False
        self._pending = None


class GarageSync:
    """Binds the identity slot and the persistence gateway to a GarageState.

    Identity changes start a query right away when an event loop is running;
    otherwise the query waits as a pending ticket until ``pump()`` runs.

    Args:
        identity: The session's IdentitySlot
        gateway: PersistenceGateway (or anything with ``list_for_owner``)
        state: GarageState to drive (a new one by default)
    """

    def __init__(self, identity: IdentitySlot, gateway, state: Optional[GarageState] = None):
        self.identity = identity
        self.state = state or GarageState()
        self._gateway = gateway
        self._tasks: set[asyncio.Task] = set()
        self._unsubscribe = identity.subscribe(self._on_identity)

    def _on_identity(self, principal: Optional[Principal]) -> None:
        if self.identity.is_resolving:
            return
        if self.state.observe_principal(principal) is None:
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            return  # stays pending until pump()
        self._start(loop, self.state.take_pending())

    def _start(self, loop, ticket: Optional[QueryTicket]) -> None:
        if ticket is None:
            return
        task = loop.create_task(self._load(ticket))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _load(self, ticket: QueryTicket) -> None:
        try:
            builds = await self._gateway.list_for_owner(ticket.principal_id)
        except STORE_ERRORS as e:
            self.state.apply_failure(ticket, e)
            return
        self.state.apply_result(ticket, builds)

    async def pump(self) -> None:
        """Start any pending or stale query and wait for all in-flight queries.

        A list invalidated since the last run (e.g. by a save) is re-queried
        here, since the identity slot does not notify when nothing changed.
        """
        if self.state.stale and not self.identity.is_resolving:
            self.state.observe_principal(self.identity.principal)
        self._start(asyncio.get_running_loop(), self.state.take_pending())
        while True:
            running = [t for t in self._tasks if not t.done()]
            if not running:
                break
            await asyncio.gather(*running)

    async def refresh(self) -> None:
        """Re-query for the current principal, if one is resolved."""
        if self.identity.is_resolving or self.identity.principal is None:
            return
        self.state.invalidate()
        await self.pump()

    def close(self) -> None:
        self._unsubscribe()


# =============================================================================
# Factory Function (Streamlit Integration)
# =============================================================================

def get_garage_sync() -> GarageSync:
    """Get or create the session's GarageSync, bound to its identity slot."""
    def _create() -> GarageSync:
        from services.persistence_gateway import get_persistence_gateway
        from state.identity_state import get_identity_slot

        return GarageSync(get_identity_slot(), get_persistence_gateway())

    from state.service_registry import get_service
    return get_service("garage_sync", _create)
