"""Token resolver factory."""

from __future__ import annotations

from draftsync.core.auth.base import TokenResolver
from draftsync.core.auth.resolvers.env import EnvTokenResolver
from draftsync.core.auth.resolvers.none import NoTokenResolver
from draftsync.core.auth.resolvers.static import StaticTokenResolver
from draftsync.core.contracts.config import DraftSyncConfig
from draftsync.core.contracts.exceptions import ConfigError

RESOLVERS: dict[str, type[TokenResolver]] = {
    "env": EnvTokenResolver,
    "token": StaticTokenResolver,
    "none": NoTokenResolver,
}


def create_token_resolver(config: DraftSyncConfig) -> TokenResolver:
    auth_mode = config.auth
    if auth_mode not in RESOLVERS:
        raise ConfigError(f"Unknown auth mode: {auth_mode}")

    if auth_mode == "env":
        return EnvTokenResolver(variable=config.token_env)
    if auth_mode == "none":
        return NoTokenResolver()
    return StaticTokenResolver(token=config.token or "")
