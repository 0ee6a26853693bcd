"""Concrete token resolvers."""

from draftsync.core.auth.resolvers.env import EnvTokenResolver
from draftsync.core.auth.resolvers.none import NoTokenResolver
from draftsync.core.auth.resolvers.static import StaticTokenResolver

__all__ = ["EnvTokenResolver", "NoTokenResolver", "StaticTokenResolver"]
