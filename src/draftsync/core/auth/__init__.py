"""Auth module public exports."""

from draftsync.core.auth.base import TokenResolver
from draftsync.core.auth.factory import create_token_resolver
from draftsync.core.auth.resolvers import EnvTokenResolver, NoTokenResolver, StaticTokenResolver

__all__ = ["EnvTokenResolver", "NoTokenResolver", "StaticTokenResolver", "TokenResolver", "create_token_resolver"]
