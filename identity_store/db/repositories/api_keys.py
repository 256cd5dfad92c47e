"""
API key repository functions.

Keys belong to one user and are addressed by their display name; each key has
a set of rights stored one row per (key, right).
"""
from __future__ import annotations

from typing import List

from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from identity_store.db import models, schemas
from identity_store.db.errors import duplicate_columns
from identity_store.errors import APIKeyNameConflict, APIKeyNotFound
from identity_store.utils.rights import Right

_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


def _dialect_insert(db: Session):
    dialect = db.get_bind().dialect.name
    try:
        return _INSERTS[dialect]
    except KeyError as exc:
        raise NotImplementedError(f"Rights insert is not supported on dialect {dialect!r}") from exc


def _to_schema(row: models.APIKey) -> schemas.APIKey:
    return schemas.APIKey(key=row.key, name=row.key_name)


def save_api_key(db: Session, *, user_id: str, key: schemas.APIKey) -> None:
    db.add(models.APIKey(key=key.key, user_id=user_id.lower(), key_name=key.name))
    try:
        db.flush()
    except IntegrityError as exc:
        duplicates = duplicate_columns(exc)
        if duplicates is not None and "key_name" in duplicates:
            raise APIKeyNameConflict(name=key.name) from exc
        raise


def save_api_key_rights(db: Session, *, key: schemas.APIKey) -> None:
    """Insert every right of ``key`` in one statement, ignoring rights already stored."""
    if not key.rights:
        return
    table = models.APIKeyRight.__table__
    stmt = (
        _dialect_insert(db)(table)
        .values([{"key": key.key, "right": right.value} for right in key.rights])
        .on_conflict_do_nothing(index_elements=["key", "right"])
    )
    db.execute(stmt)


def get_api_key(db: Session, *, user_id: str, name: str) -> schemas.APIKey:
    row = (
        db.query(models.APIKey)
        .filter(models.APIKey.user_id == user_id.lower(), models.APIKey.key_name == name.strip())
        .first()
    )
    if row is None:
        raise APIKeyNotFound(name=name)
    return _to_schema(row)


def get_api_key_owned(db: Session, *, user_id: str, key: schemas.APIKey) -> schemas.APIKey:
    row = (
        db.query(models.APIKey)
        .filter(models.APIKey.user_id == user_id.lower(), models.APIKey.key == key.key)
        .first()
    )
    if row is None:
        raise APIKeyNotFound(name=key.name)
    return _to_schema(row)


def get_api_key_rights(db: Session, *, key: str) -> List[Right]:
    rows = db.query(models.APIKeyRight.right).filter(models.APIKeyRight.key == key).all()
    return [Right(row.right) for row in rows]


def list_api_keys(db: Session, *, user_id: str) -> List[schemas.APIKey]:
    rows = (
        db.query(models.APIKey)
        .filter(models.APIKey.user_id == user_id.lower())
        .order_by(models.APIKey.key_name)
        .all()
    )
    return [_to_schema(row) for row in rows]


def delete_api_key_rights(db: Session, *, key: str) -> int:
    return db.query(models.APIKeyRight).filter(models.APIKeyRight.key == key).delete(synchronize_session=False)


def delete_api_key(db: Session, *, user_id: str, name: str) -> None:
    deleted = (
        db.query(models.APIKey)
        .filter(models.APIKey.user_id == user_id.lower(), models.APIKey.key_name == name.strip())
        .delete(synchronize_session=False)
    )
    if not deleted:
        raise APIKeyNotFound(name=name)
