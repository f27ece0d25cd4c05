"""Check Routes: create, read, update and delete uptime checks.

Invariants:
    - POST resolves the owner from the token itself (must be known and unexpired)
    - GET/PUT/DELETE authorize against the check's stored owner
    - Ownership failures are always the generic 403

Design Decisions:
    - Owner never taken from the request body: a caller can only create checks
      for the identity its token is bound to
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Header, Path, Response, status

from app.core.records import Check
from app.schemas.check import CheckCreate, CheckResponse, CheckUpdate
from app.services.service_container import Services, get_services

router = APIRouter(prefix="/api/v1/checks", tags=["checks"])

CheckIdPath = Annotated[str, Path(min_length=20, max_length=20)]


def _to_response(check: Check) -> CheckResponse:
    return CheckResponse(**check.to_record())


@router.post(
    "", response_model=CheckResponse, status_code=status.HTTP_201_CREATED,
)
async def create_check(
    body: CheckCreate,
    token: str | None = Header(None),
    services: Services = Depends(get_services),
):
    owner = await services.gate.resolve_owner(token)
    check = await services.checks.create(owner, body.model_dump())
    return _to_response(check)


@router.get("/{check_id}", response_model=CheckResponse)
async def get_check(
    check_id: CheckIdPath,
    token: str | None = Header(None),
    services: Services = Depends(get_services),
):
    return _to_response(await services.checks.get(check_id, token))


@router.put("/{check_id}", response_model=CheckResponse)
async def update_check(
    body: CheckUpdate,
    check_id: CheckIdPath,
    token: str | None = Header(None),
    services: Services = Depends(get_services),
):
    check = await services.checks.update(
        check_id, token, body.model_dump(exclude_none=True),
    )
    return _to_response(check)


@router.delete("/{check_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_check(
    check_id: CheckIdPath,
    token: str | None = Header(None),
    services: Services = Depends(get_services),
):
    await services.checks.delete(check_id, token)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
