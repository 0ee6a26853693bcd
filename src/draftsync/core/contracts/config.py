"""Configuration contracts."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from pydantic import BaseModel, Field, model_validator

from draftsync.core.contracts.exceptions import ConfigError
from draftsync.core.contracts.resource import ChangeOperation, Draft, Resource

_LOG = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 50
DEFAULT_MAX_CONCURRENCY = 10

ErrorCallback = Callable[[str, BaseException | None], None]
WarningCallback = Callable[[str], None]
BeforeUpdateCallback = Callable[[list[ChangeOperation], Draft, Resource], list[ChangeOperation] | None]
BeforeCreateCallback = Callable[[Draft], Draft | None]


class DraftSyncConfig(BaseModel):
    catalog: str = "http"
    base_url: str
    kind: str
    drafts_path: Path
    auth: str = "env"
    token: str | None = None
    token_env: str = "DRAFTSYNC_TOKEN"
    batch_size: int = Field(default=DEFAULT_BATCH_SIZE, ge=1)
    max_concurrency: int = Field(default=DEFAULT_MAX_CONCURRENCY, ge=1, le=64)
    timeout_seconds: float = Field(default=30.0, gt=0)

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_auth_token(self) -> DraftSyncConfig:
        token = (self.token or "").strip()
        if self.auth == "token":
            if not token:
                raise ValueError("token auth requires a non-empty token")
            return self
        if token:
            raise ValueError("token must be unset when auth is not 'token'")
        if self.auth not in {"env", "token", "none"}:
            raise ValueError("auth must be one of: env, token, none")
        return self


@dataclass(frozen=True)
class SyncOptions:
    """Runtime options of one sync run.

    Callbacks are optional. Without an error or warning callback the message is
    logged instead. A callback that raises is logged and otherwise ignored so that
    reporting can never abort a run.
    """

    batch_size: int = DEFAULT_BATCH_SIZE
    max_concurrency: int = DEFAULT_MAX_CONCURRENCY
    error_callback: ErrorCallback | None = None
    warning_callback: WarningCallback | None = None
    before_update_callback: BeforeUpdateCallback | None = None
    before_create_callback: BeforeCreateCallback | None = None

    def __post_init__(self) -> None:
        if self.batch_size < 1:
            raise ConfigError(f"batch_size must be at least 1, got {self.batch_size}")
        if self.max_concurrency < 1:
            raise ConfigError(f"max_concurrency must be at least 1, got {self.max_concurrency}")

    @classmethod
    def from_config(
        cls,
        config: DraftSyncConfig,
        *,
        error_callback: ErrorCallback | None = None,
        warning_callback: WarningCallback | None = None,
        before_update_callback: BeforeUpdateCallback | None = None,
        before_create_callback: BeforeCreateCallback | None = None,
    ) -> SyncOptions:
        return cls(
            batch_size=config.batch_size,
            max_concurrency=config.max_concurrency,
            error_callback=error_callback,
            warning_callback=warning_callback,
            before_update_callback=before_update_callback,
            before_create_callback=before_create_callback,
        )

    def apply_error_callback(self, reason: str, cause: BaseException | None = None) -> None:
        if self.error_callback is None:
            _LOG.warning("%s", reason, exc_info=cause)
            return
        try:
            self.error_callback(reason, cause)
        except Exception:
            _LOG.exception("error callback raised while reporting: %s", reason)

    def apply_warning_callback(self, message: str) -> None:
        if self.warning_callback is None:
            _LOG.warning("%s", message)
            return
        try:
            self.warning_callback(message)
        except Exception:
            _LOG.exception("warning callback raised while reporting: %s", message)

    def apply_before_update_callback(
        self,
        operations: list[ChangeOperation],
        draft: Draft,
        existing: Resource,
    ) -> list[ChangeOperation]:
        if self.before_update_callback is None or not operations:
            return operations
        return list(self.before_update_callback(list(operations), draft, existing) or [])

    def apply_before_create_callback(self, draft: Draft) -> Draft | None:
        if self.before_create_callback is None:
            return draft
        return self.before_create_callback(draft)
