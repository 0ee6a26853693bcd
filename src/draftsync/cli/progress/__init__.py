"""CLI progress displays."""

from draftsync.cli.progress.rich import RichSyncProgress

__all__ = ["RichSyncProgress"]
