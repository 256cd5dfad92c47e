from datetime import datetime, timedelta, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _now() -> datetime:
    return datetime.now(timezone.utc)


class ValidationToken(BaseModel):
    validation_token: str
    user_id: Optional[str] = None
    created_at: datetime = Field(default_factory=_now)
    expires_in: int  # seconds after created_at

    model_config = ConfigDict(from_attributes=True)

    @field_validator("expires_in")
    @classmethod
    def _validate_expires_in(cls, v: int):
        if v < 0:
            raise ValueError("expires_in must not be negative")
        return v

    @property
    def expires_at(self) -> datetime:
        created_at = self.created_at
        if created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=timezone.utc)
        return created_at + timedelta(seconds=self.expires_in)

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        return (now or _now()) >= self.expires_at
