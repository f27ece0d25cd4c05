"""Token Routes: issue, read, extend and revoke bearer tokens.

Invariants:
    - Issuing requires identity + password; the rest is addressed by token id
    - Extending an expired token is a 400, never a silent reissue
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Response, status

from app.core.records import Token
from app.schemas.token import TokenCreate, TokenExtend, TokenResponse
from app.services.service_container import Services, get_services

router = APIRouter(prefix="/api/v1/tokens", tags=["tokens"])

TokenIdPath = Annotated[str, Path(min_length=20, max_length=20)]


def _to_response(token: Token) -> TokenResponse:
    return TokenResponse(
        id=token.token_id,
        owner_identity=token.owner_identity,
        expires_at=token.expires_at,
    )


@router.post(
    "", response_model=TokenResponse, status_code=status.HTTP_201_CREATED,
)
async def issue_token(
    body: TokenCreate, services: Services = Depends(get_services),
):
    token = await services.tokens.issue(body.identity, body.password)
    return _to_response(token)


@router.get("/{token_id}", response_model=TokenResponse)
async def get_token(
    token_id: TokenIdPath, services: Services = Depends(get_services),
):
    return _to_response(await services.tokens.fetch(token_id))


@router.put("/{token_id}", response_model=TokenResponse)
async def extend_token(
    body: TokenExtend,
    token_id: TokenIdPath,
    services: Services = Depends(get_services),
):
    return _to_response(await services.tokens.extend(token_id))


@router.delete("/{token_id}", status_code=status.HTTP_204_NO_CONTENT)
async def revoke_token(
    token_id: TokenIdPath, services: Services = Depends(get_services),
):
    await services.tokens.revoke(token_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
