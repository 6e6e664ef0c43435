"""Shared test fixtures: in-memory database and an empty configuration cache."""

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import storefront.models  # noqa: F401
from storefront.core import database as db_module
from storefront.core.cache import config_cache
from storefront.core.database import Base

# StaticPool keeps a single connection, so every session in a test (including
# the ones FastAPI opens per request) sees the same in-memory database.
_test_engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
_TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=_test_engine)
Base.metadata.create_all(bind=_test_engine)


def _empty_tables() -> None:
    # Children before parents
    with _test_engine.begin() as conn:
        for table in reversed(Base.metadata.sorted_tables):
            conn.execute(table.delete())


@pytest.fixture(autouse=True)
def setup_database(monkeypatch):
    """Point the application at the in-memory database for one test.

    Rows are removed afterwards and the process-wide configuration cache is
    cleared on both sides, so neither data nor cached rule snapshots leak
    from one test into the next.
    """
    monkeypatch.setattr(db_module, "engine", _test_engine)
    monkeypatch.setattr(db_module, "SessionLocal", _TestSessionLocal)
    config_cache.clear()

    yield

    config_cache.clear()
    _empty_tables()
