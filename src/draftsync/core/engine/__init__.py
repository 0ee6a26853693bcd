"""Engine module exports."""

from draftsync.core.engine.cache import IdentifierCache
from draftsync.core.engine.orchestrator import SyncOrchestrator
from draftsync.core.engine.progress import NullSyncProgress, SyncProgress

__all__ = ["IdentifierCache", "NullSyncProgress", "SyncOrchestrator", "SyncProgress"]
