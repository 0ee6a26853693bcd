"""Factory for creating catalog instances.

Decouples catalog selection from catalog implementation. The SDK uses this
factory to instantiate catalogs by name, without importing concrete catalogs.
"""

from __future__ import annotations

from draftsync.core.catalogs.http import HttpCatalog
from draftsync.core.contracts.catalog import Catalog
from draftsync.core.contracts.config import DraftSyncConfig
from draftsync.core.contracts.exceptions import ConfigError

_REGISTRY: dict[str, type[Catalog]] = {
    "http": HttpCatalog,
}


def register(name: str, catalog_cls: type[Catalog]) -> None:
    """Register a catalog class by name.

    The class is constructed with ``base_url``, ``token`` and ``timeout_seconds``
    keyword arguments.
    """
    _REGISTRY[name] = catalog_cls


def create_catalog(config: DraftSyncConfig, *, token: str | None = None) -> Catalog:
    """Create a catalog instance for *config*.

    The returned catalog is an async context manager. Use it like:

        async with create_catalog(config, token=token) as catalog:
            resources = await catalog.fetch_by_keys("categories", ["shoes"])

    Raises:
        ConfigError: If the catalog name is not registered.
    """
    if config.catalog not in _REGISTRY:
        available = ", ".join(sorted(_REGISTRY)) or "(none registered)"
        raise ConfigError(f"Unknown catalog: {config.catalog!r}. Available: {available}")

    catalog_cls = _REGISTRY[config.catalog]
    return catalog_cls(  # type: ignore[call-arg]
        base_url=config.base_url,
        token=token,
        timeout_seconds=config.timeout_seconds,
    )
