"""Authorization Gate: the one policy deciding whether a token may act for an owner.

Invariants:
    - Today's policy: exact owner match + unexpired token (delegated to TokenAuthority.verify)
    - Every refusal is the same ForbiddenError, whatever the cause

Design Decisions:
    - Named seam between services and TokenAuthority: the policy can grow
      (e.g. roles) without touching UserDirectory/CheckRegistry call sites
    - resolve_owner for operations addressed by token alone (check creation)
"""

from app.core.domain_types import Identity
from app.core.errors import ForbiddenError, ResourceNotFoundError
from app.services.token_authority import TokenAuthority


class AuthorizationGate:
    """Stateless policy wrapper over TokenAuthority."""

    def __init__(self, tokens: TokenAuthority):
        self._tokens = tokens

    async def authorize(self, token_id: str | None, required_owner: str) -> bool:
        return await self._tokens.verify(token_id, required_owner)

    async def require(self, token_id: str | None, required_owner: str) -> None:
        """Raise ForbiddenError unless authorize() holds."""
        if not await self.authorize(token_id, required_owner):
            raise ForbiddenError()

    async def resolve_owner(self, token_id: str | None) -> Identity:
        """Owner a valid token acts for; ForbiddenError for unknown or expired tokens."""
        try:
            token = await self._tokens.fetch(token_id)
        except ResourceNotFoundError:
            raise ForbiddenError()
        await self.require(token_id, token.owner_identity)
        return token.owner_identity
