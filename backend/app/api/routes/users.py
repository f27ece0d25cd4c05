"""User Routes: signup, profile read/update and account deletion.

Invariants:
    - Token travels in the `token` header; UserDirectory decides authorization
    - Responses never include the password hash
    - DELETE returns 204 only when the whole cascade succeeded

Design Decisions:
    - Thin routes: no business logic, errors mapped by global handlers
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Header, Path, Response, status

from app.schemas.user import UserCreate, UserResponse, UserUpdate
from app.services.service_container import Services, get_services

router = APIRouter(prefix="/api/v1/users", tags=["users"])

IdentityPath = Annotated[str, Path(min_length=10, max_length=10)]


@router.post(
    "", response_model=UserResponse, status_code=status.HTTP_201_CREATED,
)
async def create_user(
    body: UserCreate, services: Services = Depends(get_services),
):
    """Sign up a new user."""
    return await services.users.create(
        body.identity,
        {
            "first_name": body.first_name,
            "last_name": body.last_name,
            "agreed_to_terms": body.agreed_to_terms,
        },
        body.password,
    )


@router.get("/{identity}", response_model=UserResponse)
async def get_user(
    identity: IdentityPath,
    token: str | None = Header(None),
    services: Services = Depends(get_services),
):
    return await services.users.get(identity, token)


@router.put("/{identity}", response_model=UserResponse)
async def update_user(
    body: UserUpdate,
    identity: IdentityPath,
    token: str | None = Header(None),
    services: Services = Depends(get_services),
):
    return await services.users.update(
        identity, token, body.model_dump(exclude_none=True),
    )


@router.delete("/{identity}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    identity: IdentityPath,
    token: str | None = Header(None),
    services: Services = Depends(get_services),
):
    """Delete the user, then every check it owned."""
    await services.users.delete(identity, token)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
