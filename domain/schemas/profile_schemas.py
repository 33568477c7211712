import re
from pydantic import BaseModel, Field, field_validator
from typing import Optional
from datetime import datetime
from uuid import UUID

POSTAL_CODE_PATTERN = re.compile(r"^\d{2}-\d{3}$")
NICK_MAX_LENGTH = 40


class ProfileResponse(BaseModel):
    user_id: UUID
    nick: str
    postal_code: str
    complete: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class ProfileUpdateRequest(BaseModel):
    """Partial profile edit; omitted fields keep their value."""

    nick: Optional[str] = Field(default=None, description="1-40 characters after trimming")
    postal_code: Optional[str] = Field(default=None, description="Polish format NN-NNN")

    @field_validator("nick")
    @classmethod
    def validate_nick(cls, v):
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("nick must not be blank")
        if len(v) > NICK_MAX_LENGTH:
            raise ValueError(f"nick must be at most {NICK_MAX_LENGTH} characters")
        return v

    @field_validator("postal_code")
    @classmethod
    def validate_postal_code(cls, v):
        if v is None:
            return v
        v = v.strip()
        if not POSTAL_CODE_PATTERN.match(v):
            raise ValueError("postal_code must look like 00-000")
        return v
