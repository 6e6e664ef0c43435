"""Engine, session factory and the ``get_db`` request dependency."""

from collections.abc import Generator
from typing import Any

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from storefront.core.config import settings


def _is_sqlite(dsn: str) -> bool:
    return dsn.startswith("sqlite")


def _enable_sqlite_foreign_keys(dbapi_connection: Any, _connection_record: Any) -> None:
    # SQLite leaves foreign key enforcement off per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys = ON")
    cursor.close()


def build_engine(dsn: str) -> Engine:
    """Create the engine for ``dsn``.

    SQLite connections are shared across FastAPI's worker threads and get
    foreign keys switched on; server databases get connection pre-ping.
    """
    if _is_sqlite(dsn):
        sqlite_engine = create_engine(dsn, connect_args={"check_same_thread": False})
        event.listen(sqlite_engine, "connect", _enable_sqlite_foreign_keys)
        return sqlite_engine
    return create_engine(dsn, pool_pre_ping=True)


engine = build_engine(settings.APP_DATABASE_DSN)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base: Any = declarative_base()


def get_db() -> Generator[Session, None, None]:
    """Yield a session for one request and close it afterwards."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
