"""Draft loading exports."""

from draftsync.core.drafts.loader import DraftLoader

__all__ = ["DraftLoader"]
