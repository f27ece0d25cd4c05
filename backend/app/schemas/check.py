"""Check Schemas: check definition payloads and projection.

Invariants:
    - success_codes and timeout_seconds use StrictInt: JSON booleans and numeric
      strings are rejected instead of coerced
    - Enum membership, url non-blank and the timeout range are enforced by
      core/enforce_check_fields.py

Design Decisions:
    - CheckUpdate all-optional; model_dump(exclude_none=True) yields the patch
"""

from pydantic import BaseModel, StrictInt


class CheckCreate(BaseModel):
    protocol: str
    url: str
    method: str
    success_codes: list[StrictInt]
    timeout_seconds: StrictInt


class CheckUpdate(BaseModel):
    protocol: str | None = None
    url: str | None = None
    method: str | None = None
    success_codes: list[StrictInt] | None = None
    timeout_seconds: StrictInt | None = None


class CheckResponse(BaseModel):
    id: str
    owner_identity: str
    protocol: str
    url: str
    method: str
    success_codes: list[int]
    timeout_seconds: int
