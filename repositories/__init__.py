"""
Repository Layer Package

Repository classes encapsulate all database access behind small,
mockable interfaces.

Key Components:
- BaseRepository: Foundation class with read_df() / execute()
- DocumentStore / SqlDocumentStore: schemaless document collections over SQL
- BuildRepository: Configuration <-> builds-collection documents
"""

from repositories.base import BaseRepository
from repositories.document_store import (
    DocumentStore,
    SqlDocumentStore,
    get_document_store,
)
from repositories.build_repo import (
    BUILDS_COLLECTION,
    BuildRepository,
    get_build_repository,
)

__all__ = [
    "BaseRepository",
    "DocumentStore",
    "SqlDocumentStore",
    "get_document_store",
    "BUILDS_COLLECTION",
    "BuildRepository",
    "get_build_repository",
]
