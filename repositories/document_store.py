"""
Document Store

A schemaless document collection on top of a SQL database. Each document is
one row in the ``documents`` table: a store-assigned record id, the collection
name, and the JSON body. Queries are equality filters on top-level body fields
evaluated with SQLite's json_extract.

There are no transactions across calls and no schema checks on the body.
"""

import json
import logging
import re
import uuid
from datetime import datetime, timezone
from typing import Any, Mapping, Optional, Protocol

from sqlalchemy import text

from config import DatabaseConfig
from domain.converters import parse_document, safe_str
from logging_config import setup_logging
from repositories.base import BaseRepository

logger = setup_logging(__name__, log_file="document_store.log")


# =============================================================================
# Constants
# =============================================================================

DOCUMENTS_TABLE = "documents"
_FIELD_NAME = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

_CREATE_TABLE = text(
    f"""
    CREATE TABLE IF NOT EXISTS {DOCUMENTS_TABLE} (
        record_id TEXT PRIMARY KEY,
        collection TEXT NOT NULL,
        body TEXT NOT NULL,
        created_at TEXT NOT NULL
    )
    """
)
_CREATE_INDEX = text(
    f"CREATE INDEX IF NOT EXISTS idx_{DOCUMENTS_TABLE}_collection "
    f"ON {DOCUMENTS_TABLE} (collection)"
)
_INSERT = text(
    f"INSERT INTO {DOCUMENTS_TABLE} (record_id, collection, body, created_at) "
    "VALUES (:record_id, :collection, :body, :created_at)"
)


# =============================================================================
# Protocol
# =============================================================================

class DocumentStore(Protocol):
    """What the persistence layer needs from a document service."""

    def create(self, collection: str, document: Mapping[str, Any]) -> str: ...

    def query(
        self, collection: str, filters: Mapping[str, Any]
    ) -> list[tuple[str, dict[str, Any]]]: ...


# =============================================================================
# Query construction
# =============================================================================

def build_query(collection: str, filters: Mapping[str, Any]):
    """
    Build the SELECT for an equality-filtered collection query.

    Field names become JSON paths passed as bound parameters, and are
    restricted to identifier characters.

    Returns:
        (TextClause, params) tuple
    """
    clauses = ["collection = :collection"]
    params: dict[str, Any] = {"collection": collection}
    for i, (field_name, value) in enumerate(sorted(filters.items())):
        if not _FIELD_NAME.match(field_name):
            raise ValueError(f"Invalid filter field name {field_name!r}")
        clauses.append(f"json_extract(body, :path_{i}) = :value_{i}")
        params[f"path_{i}"] = f"$.{field_name}"
        params[f"value_{i}"] = value
    stmt = text(
        f"SELECT record_id, body FROM {DOCUMENTS_TABLE} "
        f"WHERE {' AND '.join(clauses)} "
        "ORDER BY created_at, rowid"
    )
    return stmt, params


# =============================================================================
# SqlDocumentStore
# =============================================================================

class SqlDocumentStore(BaseRepository):
    """Document store backed by the ``documents`` table.

    Works against the local SQLite file or a Turso database, whichever the
    DatabaseConfig's store engine points at.
    """

    def __init__(self, db: DatabaseConfig, logger_instance: Optional[logging.Logger] = None):
        super().__init__(db, logger_instance or logger)

    def ensure_schema(self) -> None:
        """Create the documents table and index if missing."""
        with self.engine.begin() as conn:
            conn.execute(_CREATE_TABLE)
            conn.execute(_CREATE_INDEX)
        self._logger.info(f"Schema ready for {self.db.alias}")

    def _recover(self) -> bool:
        self.ensure_schema()
        return True

    def create(self, collection: str, document: Mapping[str, Any]) -> str:
        """Insert one document and return its new record id."""
        record_id = uuid.uuid4().hex
        params = {
            "record_id": record_id,
            "collection": collection,
            "body": json.dumps(dict(document), sort_keys=True),
            "created_at": datetime.now(timezone.utc).isoformat(),
        }
        try:
            self.execute(_INSERT, params)
        except Exception as e:
            if "no such table" not in str(e).lower():
                raise
            self._recover()
            self.execute(_INSERT, params)
        self._logger.info(f"Created {collection}/{record_id}")
        return record_id

    def query(
        self, collection: str, filters: Mapping[str, Any]
    ) -> list[tuple[str, dict[str, Any]]]:
        """Return ``(record_id, document)`` pairs matching every filter."""
        stmt, params = build_query(collection, filters)
        df = self.read_df(stmt, params)
        results = []
        for row in df.itertuples(index=False):
            record_id = safe_str(row.record_id)
            try:
                results.append((record_id, parse_document(row.body)))
            except ValueError as e:
                self._logger.warning(f"Skipping undecodable document {collection}/{record_id}: {e}")
        self._logger.debug(f"Query {collection} {dict(filters)} -> {len(results)} documents")
        return results


# =============================================================================
# Factory Function (Streamlit Integration)
# =============================================================================

def get_document_store() -> SqlDocumentStore:
    """Get or create the SqlDocumentStore for the active environment."""
    def _create() -> SqlDocumentStore:
        store = SqlDocumentStore(DatabaseConfig.from_settings())
        store.ensure_schema()
        return store

    try:
        from state import get_service
        return get_service("document_store", _create)
    except ImportError:
        return _create()
