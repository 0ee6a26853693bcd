"""Token resolver contract."""

from __future__ import annotations

from abc import ABC, abstractmethod


class TokenResolver(ABC):
    """Produces the bearer token used by the HTTP catalog, or ``None`` for anonymous access."""

    @abstractmethod
    async def resolve(self) -> str | None: ...  # pragma: no cover
