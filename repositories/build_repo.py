"""
Build Repository

Translates configurations to and from documents in the builds collection.
Synchronous; the async boundary, timeouts and error mapping live in
services/persistence_gateway.py.
"""

import logging
from typing import Optional

from domain.errors import InvalidKey
from domain.models import DOC_OWNER_ID, Configuration, PrincipalID, RecordID, SavedBuild
from logging_config import setup_logging
from repositories.document_store import DocumentStore

logger = setup_logging(__name__, log_file="build_repo.log")

BUILDS_COLLECTION = "builds"


class BuildRepository:
    """Owner-scoped access to saved builds.

    Args:
        store: Any DocumentStore implementation
        collection: Collection name for builds
    """

    def __init__(
        self,
        store: DocumentStore,
        collection: str = BUILDS_COLLECTION,
        logger_instance: Optional[logging.Logger] = None,
    ):
        self._store = store
        self.collection = collection
        self._logger = logger_instance or logger

    def create_build(self, config: Configuration, owner_id: PrincipalID) -> RecordID:
        """Write one new document for ``config`` owned by ``owner_id``.

        No deduplication: equal configurations produce distinct records.
        """
        if not owner_id:
            raise ValueError("owner_id must not be empty")
        record_id = self._store.create(self.collection, config.to_document(owner_id))
        self._logger.info(f"Saved build {record_id} for owner {owner_id}")
        return record_id

    def find_by_owner(self, owner_id: PrincipalID) -> list[SavedBuild]:
        """All builds owned by ``owner_id``, in store order.

        Documents that no longer match the catalog are skipped with a warning.
        """
        rows = self._store.query(self.collection, {DOC_OWNER_ID: owner_id})
        builds = []
        for record_id, document in rows:
            try:
                builds.append(SavedBuild.from_document(record_id, document))
            except (InvalidKey, ValueError) as e:
                self._logger.warning(f"Skipping unreadable build {record_id}: {e}")
        return builds


# =============================================================================
# Factory Function (Streamlit Integration)
# =============================================================================

def get_build_repository() -> BuildRepository:
    """Get or create the BuildRepository for the active environment."""
    def _create() -> BuildRepository:
        from repositories.document_store import get_document_store
        from settings_service import SettingsService

        return BuildRepository(
            get_document_store(),
            collection=SettingsService().builds_collection,
        )

    try:
        from state import get_service
        return get_service("build_repository", _create)
    except ImportError:
        return _create()
