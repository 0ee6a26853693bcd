"""Per-kind change-operation computation contract."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import ClassVar

from draftsync.core.contracts.resource import ChangeOperation, Draft, Resource


class ActionComputer(ABC):
    """Pure diff from an existing resource to a draft of the same kind.

    Implementations must not perform I/O and must return the same ordered list
    for the same inputs.
    """

    kind: ClassVar[str]

    @abstractmethod
    def compute(self, existing: Resource, draft: Draft) -> list[ChangeOperation]: ...  # pragma: no cover
