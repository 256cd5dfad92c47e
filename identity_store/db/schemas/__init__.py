"""
Pydantic schemas for the values the stores accept and return.
"""

from .users import Attributer, User, UserWithAttributes, UserFactory
from .tokens import ValidationToken
from .api_keys import APIKey

__all__ = [
    "Attributer",
    "User",
    "UserWithAttributes",
    "UserFactory",
    "ValidationToken",
    "APIKey",
]
