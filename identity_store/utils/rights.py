"""
API key right constants and helpers.

Centralized definitions for the rights an API key can carry so that string
literals are not scattered across the codebase. The enum values are the
stable storage representation.
"""

from enum import Enum
from typing import FrozenSet, Iterable, List


class Right(str, Enum):
    """Permissions that can be granted to a user API key."""
    RIGHT_USER_INFO = "RIGHT_USER_INFO"
    RIGHT_USER_SETTINGS_BASIC = "RIGHT_USER_SETTINGS_BASIC"
    RIGHT_USER_SETTINGS_API_KEYS = "RIGHT_USER_SETTINGS_API_KEYS"
    RIGHT_USER_DELETE = "RIGHT_USER_DELETE"
    RIGHT_USER_AUTHORIZED_CLIENTS = "RIGHT_USER_AUTHORIZED_CLIENTS"
    RIGHT_USER_APPLICATIONS_LIST = "RIGHT_USER_APPLICATIONS_LIST"
    RIGHT_USER_APPLICATIONS_CREATE = "RIGHT_USER_APPLICATIONS_CREATE"
    RIGHT_USER_GATEWAYS_LIST = "RIGHT_USER_GATEWAYS_LIST"
    RIGHT_USER_GATEWAYS_CREATE = "RIGHT_USER_GATEWAYS_CREATE"
    RIGHT_USER_CLIENTS_LIST = "RIGHT_USER_CLIENTS_LIST"
    RIGHT_USER_CLIENTS_CREATE = "RIGHT_USER_CLIENTS_CREATE"
    RIGHT_USER_ORGANIZATIONS_LIST = "RIGHT_USER_ORGANIZATIONS_LIST"
    RIGHT_USER_ORGANIZATIONS_CREATE = "RIGHT_USER_ORGANIZATIONS_CREATE"
    RIGHT_USER_ADMIN = "RIGHT_USER_ADMIN"


ALL_RIGHTS: FrozenSet[str] = frozenset(right.value for right in Right)


def is_valid_right(value: str) -> bool:
    """Return True if the provided value is one of the supported rights."""
    return value in ALL_RIGHTS


def parse_rights(values: Iterable) -> List[Right]:
    """Convert raw values to ``Right`` members, dropping repeats.

    Raises ValueError on the first value that is not a known right. The order
    of first occurrence is preserved.
    """
    parsed: List[Right] = []
    for value in values:
        if isinstance(value, Right):
            right = value
        else:
            cleaned = str(value).strip().upper()
            if not is_valid_right(cleaned):
                raise ValueError(f"Invalid right: {value}")
            right = Right(cleaned)
        if right not in parsed:
            parsed.append(right)
    return parsed
