"""
Shared SQLAlchemy base and helpers.
"""
from datetime import datetime, timezone
from sqlalchemy.orm import declarative_base

# Registers the JSONB -> JSON compiler used when the schema is created on SQLite.
from .. import sqlite_compiler_shims  # noqa: F401


def now_utc() -> datetime:
    """Return an aware UTC datetime for default/updated timestamps."""
    return datetime.now(timezone.utc)


Base = declarative_base()
