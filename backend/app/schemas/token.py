"""Token Schemas: credential exchange, extension and token projection."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator


class TokenCreate(BaseModel):
    identity: str = Field(min_length=10, max_length=10)
    password: str = Field(min_length=1, max_length=200)

    @field_validator("identity", mode="before")
    @classmethod
    def strip_identity(cls, v):
        return v.strip() if isinstance(v, str) else v


class TokenExtend(BaseModel):
    """Extension request: extend must be literally true."""
    extend: bool

    @field_validator("extend")
    @classmethod
    def require_true(cls, v: bool) -> bool:
        if v is not True:
            raise ValueError("extend must be true")
        return v


class TokenResponse(BaseModel):
    id: str
    owner_identity: str
    expires_at: datetime
