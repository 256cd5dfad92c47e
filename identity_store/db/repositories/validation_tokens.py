"""
Validation token repository functions.

Tokens are single-use secrets bound to one user: create, look up, delete.
"""
from __future__ import annotations

from sqlalchemy.orm import Session

from identity_store.db import models, schemas
from identity_store.errors import ValidationTokenNotFound


def _query(db: Session, user_id: str, token: str):
    return db.query(models.ValidationToken).filter(
        models.ValidationToken.validation_token == token,
        models.ValidationToken.user_id == user_id.lower(),
    )


def save_validation_token(db: Session, *, user_id: str, token: schemas.ValidationToken) -> None:
    # Duplicate (token, user_id) pairs surface as a plain IntegrityError
    db.add(
        models.ValidationToken(
            validation_token=token.validation_token,
            user_id=user_id.lower(),
            created_at=token.created_at,
            expires_in=token.expires_in,
        )
    )
    db.flush()


def get_validation_token(db: Session, *, user_id: str, token: str) -> schemas.ValidationToken:
    row = _query(db, user_id, token).first()
    if row is None:
        raise ValidationTokenNotFound()
    return schemas.ValidationToken(
        validation_token=row.validation_token,
        user_id=row.user_id,
        created_at=row.created_at,
        expires_in=row.expires_in,
    )


def delete_validation_token(db: Session, *, user_id: str, token: str) -> None:
    deleted = _query(db, user_id, token).delete(synchronize_session=False)
    if not deleted:
        raise ValidationTokenNotFound()
