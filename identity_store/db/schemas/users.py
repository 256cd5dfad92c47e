from datetime import datetime
from typing import Any, Callable, Dict, Optional, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field


@runtime_checkable
class Attributer(Protocol):
    """Extension capability: a value that carries open-ended extra attributes."""

    def get_attributes(self) -> Dict[str, Any]:
        ...

    def set_attributes(self, attributes: Dict[str, Any]) -> None:
        ...


class User(BaseModel):
    # Every field has a default so a factory can hand the store an empty value to fill
    user_id: str = ""
    name: str = ""
    email: str = ""
    password: str = Field(default="", repr=False)
    validated_at: Optional[datetime] = None
    admin: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    model_config = ConfigDict(from_attributes=True)


class UserWithAttributes(User):
    """User that also carries extra attributes persisted alongside the fixed columns."""

    attributes: Dict[str, Any] = Field(default_factory=dict)

    def get_attributes(self) -> Dict[str, Any]:
        return dict(self.attributes)

    def set_attributes(self, attributes: Dict[str, Any]) -> None:
        self.attributes = dict(attributes)


UserFactory = Callable[[], User]
