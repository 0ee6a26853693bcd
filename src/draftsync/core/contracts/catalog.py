"""Remote catalog adapter contract."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Collection, Sequence
from types import TracebackType

from draftsync.core.contracts.outcomes import UpdateOutcome
from draftsync.core.contracts.resource import ChangeOperation, Draft, Resource


class Catalog(ABC):
    """Remote store of same-kind resources.

    Reads and creates raise ``CatalogError`` subclasses on failure. Updates report
    their result as an ``UpdateOutcome`` variant so callers can branch on conflicts
    without exception control flow.
    """

    @abstractmethod
    async def __aenter__(self) -> Catalog: ...  # pragma: no cover

    @abstractmethod
    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None: ...  # pragma: no cover

    @abstractmethod
    async def fetch_by_keys(self, kind: str, keys: Collection[str]) -> list[Resource]: ...  # pragma: no cover

    @abstractmethod
    async def fetch_by_id(self, kind: str, resource_id: str) -> Resource | None: ...  # pragma: no cover

    @abstractmethod
    async def create(self, kind: str, draft: Draft) -> Resource: ...  # pragma: no cover

    @abstractmethod
    async def update(
        self,
        kind: str,
        resource_id: str,
        expected_version: int,
        operations: Sequence[ChangeOperation],
    ) -> UpdateOutcome: ...  # pragma: no cover
