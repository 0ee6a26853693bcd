"""Catalog implementations and factory."""

from draftsync.core.catalogs.dry_run import DryRunCatalog, DryRunOperation
from draftsync.core.catalogs.factory import create_catalog, register
from draftsync.core.catalogs.http import HttpCatalog

__all__ = ["DryRunCatalog", "DryRunOperation", "HttpCatalog", "create_catalog", "register"]
