"""
Pytest configuration file for the NexDrive garage project.
This file sets up the Python path so tests can import modules from the project root.
"""
import sys
from pathlib import Path

import pytest

# Add the project root to Python path
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from config import DatabaseConfig  # noqa: E402
from domain.models import Principal  # noqa: E402
from repositories.build_repo import BuildRepository  # noqa: E402
from repositories.document_store import SqlDocumentStore  # noqa: E402
from services.persistence_gateway import PersistenceGateway  # noqa: E402


@pytest.fixture
def temp_db(tmp_path):
    # path for a fresh db per test
    return str(tmp_path / "test.db")


@pytest.fixture
def db_config(temp_db):
    db = DatabaseConfig("test", temp_db)
    yield db
    db.dispose()


@pytest.fixture
def store(db_config):
    store = SqlDocumentStore(db_config)
    store.ensure_schema()
    return store


@pytest.fixture
def build_repo(store):
    return BuildRepository(store)


@pytest.fixture
def gateway(build_repo):
    return PersistenceGateway(build_repo, timeout=5.0)


@pytest.fixture
def alice():
    return Principal("user-alice", display_name="Alice Liddell", email="alice@example.com")


@pytest.fixture
def bob():
    return Principal("user-bob", display_name="Bob Builder", email="bob@example.com")
