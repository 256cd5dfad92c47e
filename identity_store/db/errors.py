"""
Classification of storage-layer integrity errors.

The stores only need to know whether a write was rejected by a unique
constraint and which column(s) collided. Everything else (foreign key
violations, connection failures, ...) is left for the caller to propagate.
"""
from __future__ import annotations

import re
from typing import Dict, Optional

from sqlalchemy.exc import IntegrityError

PG_UNIQUE_VIOLATION = "23505"

# DETAIL:  Key (user_id, key_name)=(alice, primary) already exists.
_PG_DETAIL = re.compile(r"Key \((?P<columns>.+?)\)=\((?P<values>.*)\) already exists")
# UNIQUE constraint failed: users_api_keys.user_id, users_api_keys.key_name
_SQLITE_UNIQUE = re.compile(r"UNIQUE constraint failed: (?P<columns>.+)$", re.MULTILINE)


def _sqlstate(orig) -> Optional[str]:
    # psycopg2 exposes pgcode, psycopg 3 exposes sqlstate
    return getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)


def _pg_detail(orig) -> str:
    diag = getattr(orig, "diag", None)
    detail = getattr(diag, "message_detail", None) if diag is not None else None
    return detail or str(orig)


def duplicate_columns(exc: BaseException) -> Optional[Dict[str, Optional[str]]]:
    """Return the columns of a violated unique constraint, or None.

    Values are included where the backend reports them (PostgreSQL); SQLite
    only names the columns, so their values are None.
    """
    if not isinstance(exc, IntegrityError):
        return None
    orig = exc.orig

    sqlstate = _sqlstate(orig)
    if sqlstate is not None:
        if sqlstate != PG_UNIQUE_VIOLATION:
            return None
        match = _PG_DETAIL.search(_pg_detail(orig))
        if match is None:
            return {}
        columns = [column.strip().strip('"') for column in match.group("columns").split(",")]
        raw_values = match.group("values")
        if len(columns) == 1:
            values = [raw_values]
        else:
            values = [value.strip() for value in raw_values.split(",", len(columns) - 1)]
        if len(values) != len(columns):
            return {column: None for column in columns}
        return dict(zip(columns, values))

    match = _SQLITE_UNIQUE.search(str(orig))
    if match is None:
        return None
    return {column.strip().rsplit(".", 1)[-1]: None for column in match.group("columns").split(",")}


def is_duplicate(exc: BaseException) -> bool:
    return duplicate_columns(exc) is not None
