"""Config loading exports."""

from draftsync.core.config.loader import load_config

__all__ = ["load_config"]
