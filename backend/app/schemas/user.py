"""User Schemas: signup, profile update and public projection.

Invariants:
    - identity is exactly 10 characters after trimming
    - UserResponse has no password field

Design Decisions:
    - field_validator(mode="before") trims before length constraints apply
"""

from pydantic import BaseModel, Field, field_validator


class UserCreate(BaseModel):
    """Signup payload: every field required, terms must be agreed."""
    identity: str = Field(min_length=10, max_length=10)
    first_name: str = Field(max_length=100)
    last_name: str = Field(max_length=100)
    password: str = Field(max_length=200)
    agreed_to_terms: bool

    @field_validator("identity", mode="before")
    @classmethod
    def strip_identity(cls, v):
        return v.strip() if isinstance(v, str) else v


class UserUpdate(BaseModel):
    """Profile patch: at least one field (checked by the service)."""
    first_name: str | None = Field(None, max_length=100)
    last_name: str | None = Field(None, max_length=100)
    password: str | None = Field(None, max_length=200)


class UserResponse(BaseModel):
    identity: str
    first_name: str
    last_name: str
    agreed_to_terms: bool
    check_ids: list[str]
