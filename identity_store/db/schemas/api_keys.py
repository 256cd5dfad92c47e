from typing import List

from pydantic import BaseModel, ConfigDict, Field, field_validator

from identity_store.utils.rights import Right, parse_rights


class APIKey(BaseModel):
    key: str
    name: str
    rights: List[Right] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)

    @field_validator("name")
    @classmethod
    def _validate_name(cls, v: str):
        cleaned = v.strip()
        if not cleaned:
            raise ValueError("API key name must not be empty")
        return cleaned

    @field_validator("rights", mode="before")
    @classmethod
    def _validate_rights(cls, v):
        # Unknown rights are rejected here; repeats collapse to one entry
        return parse_rights(v or [])
