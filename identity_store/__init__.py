"""
Transactional store for user accounts, their extra attributes, validation
tokens and API keys.
"""

from identity_store.db.database import (
    build_engine,
    build_session_factory,
    get_database_url,
    init_schema,
    transaction,
)
from identity_store.db.repositories.attributes import AttributeStore
from identity_store.db.repositories.users import UserStore
from identity_store.db.schemas import APIKey, Attributer, User, UserWithAttributes, ValidationToken
from identity_store.utils.rights import Right

__all__ = [
    "build_engine",
    "build_session_factory",
    "get_database_url",
    "init_schema",
    "transaction",
    "AttributeStore",
    "UserStore",
    "APIKey",
    "Attributer",
    "User",
    "UserWithAttributes",
    "ValidationToken",
    "Right",
]
