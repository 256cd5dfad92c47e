"""
Database engine and session management.

Builds the SQLAlchemy engine from environment configuration (with SQLite
conveniences for tests and local use) and provides the transaction scope the
stores run their statements in.
"""
import logging
import os
from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from identity_store.db import models

logger = logging.getLogger(__name__)

_POSTGRES_VARS = ("POSTGRES_USER", "POSTGRES_PASSWORD", "POSTGRES_HOST", "POSTGRES_PORT", "POSTGRES_DB")


def get_database_url() -> str:
    """Return the database URL from the environment.

    Precedence: IDENTITY_STORE_TEST_DB, then DATABASE_URL, then a PostgreSQL
    URL assembled from the POSTGRES_* variables (all must be set).
    """
    explicit_test_db = os.getenv("IDENTITY_STORE_TEST_DB")
    if explicit_test_db:
        return explicit_test_db

    if os.getenv("DATABASE_URL"):
        return os.getenv("DATABASE_URL")

    values = {name: os.getenv(name) for name in _POSTGRES_VARS}
    missing = [name for name, value in values.items() if not value]
    if missing:
        raise ValueError(f"Missing required database environment variables: {', '.join(missing)}")

    return (
        f"postgresql://{values['POSTGRES_USER']}:{values['POSTGRES_PASSWORD']}"
        f"@{values['POSTGRES_HOST']}:{values['POSTGRES_PORT']}/{values['POSTGRES_DB']}"
    )


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):  # pragma: no cover - trivial
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys = ON")
    cursor.close()


def build_engine(url: Optional[str] = None, **kwargs) -> Engine:
    """Create the engine for ``url`` (or the environment's URL).

    SQLite engines allow cross-thread use and enforce foreign keys; in-memory
    SQLite uses StaticPool so the schema persists across connections.
    """
    url = url or get_database_url()
    parsed = make_url(url)
    if parsed.get_backend_name() != "sqlite":
        return create_engine(url, **kwargs)

    options = {"connect_args": {"check_same_thread": False}}
    if parsed.database in (None, "", ":memory:"):
        options["poolclass"] = StaticPool
    options.update(kwargs)
    engine = create_engine(url, **options)
    event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    return engine


def build_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)


def init_schema(engine: Engine) -> None:
    """Create all tables that do not exist yet."""
    models.Base.metadata.create_all(bind=engine)


def drop_schema(engine: Engine) -> None:
    models.Base.metadata.drop_all(bind=engine)


@contextmanager
def transaction(session_factory: sessionmaker) -> Iterator[Session]:
    """Yield a session inside one transaction.

    Commits when the block exits normally. Any exception rolls the whole
    transaction back and is re-raised unchanged. The session is always closed.
    """
    session = session_factory()
    try:
        with session.begin():
            yield session
    except Exception as exc:
        logger.debug("Transaction rolled back after %s", type(exc).__name__)
        raise
    finally:
        session.close()
