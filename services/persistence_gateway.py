"""
Persistence Gateway

Async boundary between the configurator and the document store.

- save(): snapshot the configuration, stamp the principal's id as owner,
  write one new document. Attempted once; never retried.
- list_for_owner(): owner-scoped query, empty list means "no builds yet".

Blocking repository calls run on a dedicated thread pool under
asyncio.wait_for, so every call resolves to a value or exactly one of
StoreTimeout / StoreUnavailable (or Unauthenticated for a save without a
principal). The pool is not the loop's default executor: asyncio.run() joins
the default executor on exit, which would make callers wait for a hung store
call long after its timeout.

Only store failures (database, driver and OS errors) become StoreUnavailable;
anything else is a caller bug and propagates unchanged.
"""

import asyncio
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Optional, TypeVar

from pandas.errors import DatabaseError
from sqlalchemy.exc import SQLAlchemyError

from domain.errors import StoreTimeout, StoreUnavailable, Unauthenticated
from domain.models import Configuration, Principal, PrincipalID, RecordID, SavedBuild
from logging_config import setup_logging
from repositories.build_repo import BuildRepository
from services.configuration_service import is_savable, snapshot
from settings_service import DEFAULT_STORE_TIMEOUT

logger = setup_logging(__name__, log_file="persistence_gateway.log")

T = TypeVar("T")

STORE_WORKERS = 4
STORE_FAILURES = (SQLAlchemyError, DatabaseError, OSError)

_store_executor = ThreadPoolExecutor(max_workers=STORE_WORKERS, thread_name_prefix="store")


class PersistenceGateway:
    """Owner-scoped save/list over a BuildRepository.

    Args:
        repo: BuildRepository instance for data access
        timeout: Seconds to wait for each store call
    """

    def __init__(self, repo: BuildRepository, timeout: float = DEFAULT_STORE_TIMEOUT):
        if timeout <= 0:
            raise ValueError(f"timeout must be positive, got {timeout}")
        self._repo = repo
        self.timeout = timeout

    async def save(
        self, config: Configuration, principal: Optional[Principal]
    ) -> RecordID:
        """
        Persist a snapshot of ``config`` as a new build owned by ``principal``.

        Args:
            config: Configuration to save; later edits to it do not affect the record
            principal: Principal authenticated at call time

        Returns:
            The store-assigned record id

        Raises:
            Unauthenticated: If no principal is authenticated (nothing is written)
            StoreTimeout: If the store does not answer in time
            StoreUnavailable: If the store call fails
        """
        if not is_savable(config, principal):
            logger.info("Save rejected: no authenticated principal")
            raise Unauthenticated("save requires an authenticated principal")

        frozen = snapshot(config)
        owner_id = principal.principal_id
        return await self._call(
            "save",
            lambda: self._repo.create_build(frozen, owner_id),
        )

    async def list_for_owner(self, principal_id: PrincipalID) -> list[SavedBuild]:
        """
        Fetch every build owned by ``principal_id``.

        Raises:
            ValueError: If principal_id is empty (there is no anonymous scope)
            StoreTimeout: If the store does not answer in time
            StoreUnavailable: If the store call fails
        """
        if not principal_id:
            raise ValueError("list_for_owner requires a principal id")
        return await self._call(
            "list_for_owner",
            lambda: self._repo.find_by_owner(principal_id),
        )

    async def _call(self, op: str, fn: Callable[[], T]) -> T:
        loop = asyncio.get_running_loop()
        try:
            return await asyncio.wait_for(
                loop.run_in_executor(_store_executor, fn), timeout=self.timeout
            )
        except asyncio.TimeoutError as e:
            logger.error(f"{op} timed out after {self.timeout}s")
            raise StoreTimeout(f"{op} timed out after {self.timeout}s") from e
        except STORE_FAILURES as e:
            logger.error(f"{op} failed: {e}")
            raise StoreUnavailable(f"{op} failed: {e}") from e


# =============================================================================
# Factory Function (Streamlit Integration)
# =============================================================================

def get_persistence_gateway() -> PersistenceGateway:
    """Get or create the PersistenceGateway for this session."""
    def _create() -> PersistenceGateway:
        from repositories.build_repo import get_build_repository
        from settings_service import SettingsService

        return PersistenceGateway(
            get_build_repository(),
            timeout=SettingsService().store_timeout,
        )

    try:
        from state import get_service
        return get_service("persistence_gateway", _create)
    except ImportError:
        return _create()
