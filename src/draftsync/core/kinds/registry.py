"""Registry of action computers by resource kind."""

from __future__ import annotations

from draftsync.core.contracts.actions import ActionComputer
from draftsync.core.contracts.exceptions import ConfigError
from draftsync.core.kinds.categories import CategoryActionComputer
from draftsync.core.kinds.product_types import ProductTypeActionComputer

_REGISTRY: dict[str, type[ActionComputer]] = {
    CategoryActionComputer.kind: CategoryActionComputer,
    ProductTypeActionComputer.kind: ProductTypeActionComputer,
}


def register(computer_cls: type[ActionComputer]) -> None:
    """Register an action computer class under its ``kind``."""
    _REGISTRY[computer_cls.kind] = computer_cls


def available_kinds() -> list[str]:
    return sorted(_REGISTRY)


def create_action_computer(kind: str) -> ActionComputer:
    if kind not in _REGISTRY:
        available = ", ".join(available_kinds()) or "(none registered)"
        raise ConfigError(f"Unknown resource kind: {kind!r}. Available: {available}")
    return _REGISTRY[kind]()
