"""
Domain-split SQLAlchemy models with an aggregator.

Exposes `Base`, the timestamp helpers, and all ORM classes.
"""

from .base import Base, now_utc  # re-export

from .users import User
from .tokens import ValidationToken
from .api_keys import APIKey, APIKeyRight
from .attributes import ExtraAttribute

__all__ = [
    # base
    "Base",
    "now_utc",
    # users
    "User",
    "ValidationToken",
    # api keys
    "APIKey",
    "APIKeyRight",
    # extension
    "ExtraAttribute",
]
