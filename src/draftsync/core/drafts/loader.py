"""Load drafts from a JSON file on disk."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from draftsync.core.contracts.exceptions import DraftLoadError
from draftsync.core.contracts.resource import Draft


class DraftLoader:
    """Reads a JSON array of draft objects.

    Each object's ``key`` member becomes the draft key and the remaining members
    become its fields. An optional ``kind`` member overrides the configured kind.
    ``null`` entries are kept as ``None`` so the sync run reports them.
    """

    def load(self, path: Path, kind: str) -> list[Draft | None]:
        """Load and parse the drafts file.

        Raises:
            DraftLoadError: If the file is missing, unreadable, contains invalid JSON,
                or an entry does not match the draft schema.
        """
        if not path.exists():
            raise DraftLoadError(f"missing drafts file: {path}")
        try:
            payload: Any = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise DraftLoadError(f"invalid JSON input: {exc}") from exc
        except OSError as exc:
            raise DraftLoadError(f"failed to read drafts file: {exc}") from exc

        if not isinstance(payload, list):
            raise DraftLoadError(f"drafts file must contain a JSON array: {path}")
        return [self._parse_entry(entry, kind, index) for index, entry in enumerate(payload)]

    @staticmethod
    def _parse_entry(entry: Any, kind: str, index: int) -> Draft | None:
        if entry is None:
            return None
        if not isinstance(entry, dict):
            raise DraftLoadError(f"draft #{index} must be an object or null")
        fields = dict(entry)
        key = fields.pop("key", None)
        draft_kind = fields.pop("kind", kind)
        try:
            return Draft(kind=draft_kind, key=key, fields=fields)
        except ValidationError as exc:
            raise DraftLoadError(f"draft #{index} validation failed: {exc}") from exc
