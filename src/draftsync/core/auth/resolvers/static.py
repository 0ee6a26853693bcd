"""Token configured inline through ``DraftSyncConfig.token``."""

from __future__ import annotations

from dataclasses import dataclass, field

from draftsync.core.auth.base import TokenResolver
from draftsync.core.contracts.exceptions import AuthenticationError


@dataclass(frozen=True)
class StaticTokenResolver(TokenResolver):
    """Catalog access token configured inline.

    A pasted ``Bearer <token>`` header value is accepted; the catalog adds the scheme itself.
    """

    token: str = field(repr=False)

    async def resolve(self) -> str:
        resolved = self.token.strip()
        scheme, _, credentials = resolved.partition(" ")
        if scheme.lower() == "bearer":
            resolved = credentials.strip()
        if not resolved:
            raise AuthenticationError("auth 'token' is configured but the catalog token is blank")
        return resolved
