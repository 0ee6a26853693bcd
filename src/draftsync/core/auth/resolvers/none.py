"""Anonymous access."""

from __future__ import annotations

from draftsync.core.auth.base import TokenResolver


class NoTokenResolver(TokenResolver):
    async def resolve(self) -> None:
        return None
