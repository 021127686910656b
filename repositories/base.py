"""
Base Repository

Foundation for repository classes: read_df() for queries and execute() for
writes, both against the DatabaseConfig's store engine.

Design Principles:
1. Dependency Injection - Receives DatabaseConfig, doesn't create it
2. Missing-table recovery - Subclasses can create their schema and retry
3. Consistent interface - All repositories inherit this pattern
"""

from typing import Any, Mapping, Optional
import logging
import pandas as pd

from config import DatabaseConfig
from logging_config import setup_logging

logger = setup_logging(__name__)


class BaseRepository:
    """
    Base class for all repository implementations.

    read_df() recovers from a missing table once:
    1. Try the read
    2. On "no such table" -> _recover() (e.g. create schema) + retry

    Attributes:
        db: DatabaseConfig instance for database access
    """

    def __init__(self, db: DatabaseConfig, logger_instance: Optional[logging.Logger] = None):
        self.db = db
        self._logger = logger_instance or logger

    @property
    def engine(self):
        return self.db.store_engine

    def read_df(
        self,
        query: Any,
        params: Mapping[str, Any] | None = None,
        *,
        recover_missing_table: bool = True,
    ) -> pd.DataFrame:
        """Execute a read-only SQL query and return a DataFrame.

        Args:
            query: SQL query string or SQLAlchemy TextClause
            params: Optional query parameters
            recover_missing_table: If True, call _recover() and retry once
                when the table does not exist yet

        Returns:
            DataFrame with query results
        """

        def _run() -> pd.DataFrame:
            with self.engine.connect() as conn:
                return pd.read_sql_query(query, conn, params=params)

        try:
            return _run()
        except Exception as e:
            msg = str(e).lower()
            if recover_missing_table and "no such table" in msg:
                self._logger.warning(f"Table missing ('{msg}'); recovering and retrying")
                if self._recover():
                    return _run()
            raise

    def execute(self, query: Any, params: Mapping[str, Any] | None = None) -> None:
        """Execute a write statement inside its own transaction."""
        with self.engine.begin() as conn:
            conn.execute(query, dict(params or {}))

    def _recover(self) -> bool:
        """Hook for subclasses; return True if a retry makes sense."""
        return False
