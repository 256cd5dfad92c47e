"""
User store.

Owns the transaction boundary for user lifecycle operations and composes the
attribute, validation token and API key helpers inside it, so every logical
write commits or rolls back as one unit.
"""
from __future__ import annotations

import logging
from typing import List, Optional


from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, sessionmaker

from identity_store.db import models, schemas
from identity_store.db.database import transaction
from identity_store.db.errors import duplicate_columns, is_duplicate
from identity_store.db.repositories import api_keys as repo_api_keys
from identity_store.db.repositories import validation_tokens as repo_tokens
from identity_store.db.repositories.attributes import AttributeStore
from identity_store.errors import (
    UserEmailNotFound,
    UserEmailTaken,
    UserIDTaken,
    UserNotFound,
)

logger = logging.getLogger(__name__)

USER_ENTITY_KIND = "user"


def _fill_user(result: schemas.User, row: models.User) -> None:
    result.user_id = row.user_id
    result.name = row.name
    result.email = row.email
    result.password = row.password
    result.validated_at = row.validated_at
    result.admin = bool(row.admin)
    result.created_at = row.created_at
    result.updated_at = row.updated_at


class UserStore:
    """Persistence for users and everything bound to them."""

    def __init__(self, session_factory: sessionmaker) -> None:
        self._session_factory = session_factory
        self.attributes = AttributeStore(USER_ENTITY_KIND)

    def _transact(self):
        return transaction(self._session_factory)

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------
    def create(self, user: schemas.User) -> None:
        """Insert ``user`` and the extra attributes it carries in one transaction."""
        with self._transact() as db:
            self._create(db, user)
            self._store_attributes(db, user.user_id.lower(), user, None)
        logger.debug("Created user %s", user.user_id.lower())

    def _create(self, db: Session, user: schemas.User) -> None:
        db.add(
            models.User(
                user_id=user.user_id.lower(),
                name=user.name,
                email=user.email.lower(),
                password=user.password,
                validated_at=user.validated_at,
                admin=user.admin,
            )
        )
        try:
            db.flush()
        except IntegrityError as exc:
            duplicates = duplicate_columns(exc)
            if duplicates is not None:
                if "email" in duplicates:
                    logger.info("Rejected user %s: email already taken", user.user_id)
                    raise UserEmailTaken(email=user.email) from exc
                if "user_id" in duplicates:
                    logger.info("Rejected user %s: id already taken", user.user_id)
                    raise UserIDTaken(user_id=user.user_id) from exc
            raise

    def get_by_id(self, user_id: str, factory: schemas.UserFactory = schemas.User) -> schemas.User:
        """Return the user with ``user_id`` (case-insensitive) built by ``factory``."""
        result = factory()
        with self._transact() as db:
            row = db.query(models.User).filter(models.User.user_id == user_id.lower()).first()
            if row is None:
                raise UserNotFound(user_id=user_id)
            _fill_user(result, row)
            self._load_attributes(db, result.user_id, result)
        return result

    def get_by_email(self, email: str, factory: schemas.UserFactory = schemas.User) -> schemas.User:
        """Return the user with ``email`` (case-insensitive) built by ``factory``."""
        result = factory()
        with self._transact() as db:
            row = db.query(models.User).filter(models.User.email == email.lower()).first()
            if row is None:
                raise UserEmailNotFound(email=email)
            _fill_user(result, row)
            self._load_attributes(db, result.user_id, result)
        return result

    def update(self, user: schemas.User) -> None:
        """Overwrite the mutable fields of ``user`` and reconcile its extra attributes."""
        with self._transact() as db:
            self._update(db, user)
            self._store_attributes(db, user.user_id.lower(), user, None)
        logger.debug("Updated user %s", user.user_id.lower())

    def _update(self, db: Session, user: schemas.User) -> None:
        try:
            updated = (
                db.query(models.User)
                .filter(models.User.user_id == user.user_id.lower())
                .update(
                    {
                        models.User.name: user.name,
                        models.User.email: user.email.lower(),
                        models.User.validated_at: user.validated_at,
                        models.User.password: user.password,
                        models.User.admin: user.admin,
                        models.User.updated_at: models.now_utc(),
                    },
                    synchronize_session=False,
                )
            )
        except IntegrityError as exc:
            if is_duplicate(exc):
                logger.info("Rejected update of user %s: email already taken", user.user_id)
                raise UserEmailTaken(email=user.email) from exc
            raise
        if not updated:
            raise UserNotFound(user_id=user.user_id)

    # ------------------------------------------------------------------
    # Extra attributes
    # ------------------------------------------------------------------
    def load_attributes(self, user_id: str, user: schemas.User) -> None:
        """Load extra attributes into ``user`` if it carries the extension capability."""
        with self._transact() as db:
            self._load_attributes(db, user_id.lower(), user)

    def _load_attributes(self, db: Session, user_id: str, user: schemas.User) -> None:
        if isinstance(user, schemas.Attributer):
            self.attributes.load_attributes(db, user_id, user)

    def store_attributes(self, user_id: str, user: schemas.User, result: Optional[schemas.User] = None) -> None:
        """Persist the extra attributes of ``user`` and write the stored mapping into ``result``."""
        with self._transact() as db:
            self._store_attributes(db, user_id.lower(), user, result)

    def _store_attributes(
        self,
        db: Session,
        user_id: str,
        user: schemas.User,
        result: Optional[schemas.User],
    ) -> None:
        if not isinstance(user, schemas.Attributer):
            return
        target = result if isinstance(result, schemas.Attributer) else None
        self.attributes.store_attributes(db, user_id, user, target)

    # ------------------------------------------------------------------
    # Validation tokens
    # ------------------------------------------------------------------
    def save_validation_token(self, user_id: str, token: schemas.ValidationToken) -> None:
        with self._transact() as db:
            repo_tokens.save_validation_token(db, user_id=user_id, token=token)

    def get_validation_token(self, user_id: str, token: str) -> schemas.ValidationToken:
        with self._transact() as db:
            return repo_tokens.get_validation_token(db, user_id=user_id, token=token)

    def delete_validation_token(self, user_id: str, token: str) -> None:
        with self._transact() as db:
            repo_tokens.delete_validation_token(db, user_id=user_id, token=token)

    # ------------------------------------------------------------------
    # API keys
    # ------------------------------------------------------------------
    def save_api_key(self, user_id: str, key: schemas.APIKey) -> None:
        """Store ``key`` and its rights; neither is visible unless both succeed."""
        with self._transact() as db:
            repo_api_keys.save_api_key(db, user_id=user_id, key=key)
            repo_api_keys.save_api_key_rights(db, key=key)
        logger.debug("Saved API key %r for user %s with %d rights", key.name, user_id.lower(), len(key.rights))

    def get_api_key(self, user_id: str, name: str) -> schemas.APIKey:
        with self._transact() as db:
            key = repo_api_keys.get_api_key(db, user_id=user_id, name=name)
            key.rights = repo_api_keys.get_api_key_rights(db, key=key.key)
        return key

    def list_api_keys(self, user_id: str) -> List[schemas.APIKey]:
        with self._transact() as db:
            keys = repo_api_keys.list_api_keys(db, user_id=user_id)
            for key in keys:
                key.rights = repo_api_keys.get_api_key_rights(db, key=key.key)
        return keys

    def update_api_key(self, user_id: str, key: schemas.APIKey) -> None:
        """Replace the rights of ``key`` with exactly ``key.rights``."""
        with self._transact() as db:
            repo_api_keys.get_api_key_owned(db, user_id=user_id, key=key)
            repo_api_keys.delete_api_key_rights(db, key=key.key)
            repo_api_keys.save_api_key_rights(db, key=key)
        logger.debug("Replaced rights of API key %r for user %s", key.name, user_id.lower())

    def delete_api_key(self, user_id: str, name: str) -> None:
        with self._transact() as db:
            key = repo_api_keys.get_api_key(db, user_id=user_id, name=name)
            repo_api_keys.delete_api_key_rights(db, key=key.key)
            repo_api_keys.delete_api_key(db, user_id=user_id, name=name)
        logger.debug("Deleted API key %r for user %s", name, user_id.lower())
