"""REST catalog adapter over httpx."""

from __future__ import annotations

import json
import logging
from collections.abc import Collection, Sequence
from types import TracebackType
from typing import Any

import httpx
from pydantic import ValidationError

from draftsync.core.contracts.catalog import Catalog
from draftsync.core.contracts.exceptions import (
    AuthenticationError,
    CatalogError,
    CatalogRejectedError,
    DuplicateFieldError,
    TransientCatalogError,
)
from draftsync.core.contracts.outcomes import Applied, Conflict, Missing, Rejected, Transient, UpdateOutcome
from draftsync.core.contracts.resource import ChangeOperation, Draft, Resource, to_json_value

_LOG = logging.getLogger(__name__)

_PAGE_LIMIT = 500
_KEYS_PER_QUERY = 100
_DUPLICATE_FIELD = "DuplicateField"


class HttpCatalog(Catalog):
    """Catalog backed by a JSON REST API.

    Resources of a kind live under ``/{kind}``. Queries by key use a ``where``
    predicate with limit/offset paging. Updates carry the expected version and the
    ordered action list; the server answers 409 on a version mismatch.
    Transient failures are reported, never retried here.
    """

    def __init__(
        self,
        *,
        base_url: str,
        token: str | None = None,
        timeout_seconds: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._token = token
        self._timeout_seconds = timeout_seconds
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> HttpCatalog:
        self._open_transport()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    def _open_transport(self) -> None:
        headers = {"Accept": "application/json"}
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            transport=self._transport,
            headers=headers,
            limits=httpx.Limits(max_connections=20, max_keepalive_connections=10),
            timeout=httpx.Timeout(self._timeout_seconds),
        )

    def _require_client(self) -> httpx.AsyncClient:
        if self._client is None:
            raise CatalogError("Catalog is not initialized. Use 'async with'.")
        return self._client

    async def _send(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        client = self._require_client()
        try:
            return await client.request(method, path, **kwargs)
        except httpx.TimeoutException as exc:
            raise TransientCatalogError(f"{method} {path} timed out") from exc
        except httpx.TransportError as exc:
            raise TransientCatalogError(f"{method} {path} failed: {exc}") from exc

    async def fetch_by_keys(self, kind: str, keys: Collection[str]) -> list[Resource]:
        unique = list(dict.fromkeys(keys))
        resources: list[Resource] = []
        for start in range(0, len(unique), _KEYS_PER_QUERY):
            chunk = unique[start : start + _KEYS_PER_QUERY]
            resources.extend(await self._query(kind, _key_predicate(chunk)))
        return resources

    async def _query(self, kind: str, where: str) -> list[Resource]:
        resources: list[Resource] = []
        offset = 0
        while True:
            response = await self._send(
                "GET",
                f"/{kind}",
                params={"where": where, "limit": _PAGE_LIMIT, "offset": offset},
            )
            _raise_for_status(response, f"query {kind}")
            page = _json_body(response)
            results = page.get("results", [])
            resources.extend(_decode_resource(kind, item) for item in results)
            offset += len(results)
            total = page.get("total")
            if not results or (total is not None and offset >= total) or len(results) < _PAGE_LIMIT:
                return resources

    async def fetch_by_id(self, kind: str, resource_id: str) -> Resource | None:
        response = await self._send("GET", f"/{kind}/{resource_id}")
        if response.status_code == 404:
            return None
        _raise_for_status(response, f"fetch {kind} '{resource_id}'")
        return _decode_resource(kind, _json_body(response))

    async def create(self, kind: str, draft: Draft) -> Resource:
        payload: dict[str, Any] = {"key": draft.key, **to_json_value(draft.fields)}
        response = await self._send("POST", f"/{kind}", json=payload)
        _raise_for_status(response, f"create {kind} '{draft.key}'")
        resource = _decode_resource(kind, _json_body(response))
        _LOG.debug("created %s '%s' as %s", kind, draft.key, resource.id)
        return resource

    async def update(
        self,
        kind: str,
        resource_id: str,
        expected_version: int,
        operations: Sequence[ChangeOperation],
    ) -> UpdateOutcome:
        payload = {
            "version": expected_version,
            "actions": [_encode_operation(operation) for operation in operations],
        }
        try:
            response = await self._send("POST", f"/{kind}/{resource_id}", json=payload)
        except TransientCatalogError as exc:
            return Transient(str(exc), exc)

        status = response.status_code
        if status == 409:
            return Conflict(_error_message(response))
        if status == 404:
            return Missing(_error_message(response))
        try:
            _raise_for_status(response, f"update {kind} '{resource_id}'")
        except TransientCatalogError as exc:
            return Transient(str(exc), exc)
        except CatalogError as exc:
            return Rejected(str(exc), exc)
        try:
            return Applied(_decode_resource(kind, _json_body(response)))
        except CatalogError as exc:
            return Rejected(f"update {kind} '{resource_id}' returned an unreadable resource: {exc}", exc)


def _key_predicate(keys: Sequence[str]) -> str:
    return "key in ({})".format(", ".join(json.dumps(key) for key in keys))


def _encode_operation(operation: ChangeOperation) -> dict[str, Any]:
    return {
        "action": operation.action,
        "type": str(operation.type),
        "field": operation.field,
        "value": to_json_value(operation.value),
    }


def _decode_resource(kind: str, payload: Any) -> Resource:
    if not isinstance(payload, dict) or "id" not in payload:
        raise CatalogError(f"unexpected {kind} payload: {payload!r}")
    fields = dict(payload)
    resource_id = fields.pop("id")
    key = fields.pop("key", None)
    version = fields.pop("version", 0)
    try:
        return Resource(id=resource_id, kind=kind, key=key, version=version, fields=fields)
    except ValidationError as exc:
        raise CatalogError(f"unexpected {kind} payload: {exc.error_count()} invalid value(s)") from exc


def _json_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError as exc:
        raise CatalogError(f"invalid JSON response ({response.status_code})") from exc


def _error_body(response: httpx.Response) -> dict[str, Any]:
    try:
        body = response.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}


def _error_message(response: httpx.Response) -> str:
    message = _error_body(response).get("message")
    if isinstance(message, str) and message:
        return message
    return response.text or f"HTTP {response.status_code}"


def _raise_for_status(response: httpx.Response, context: str) -> None:
    status = response.status_code
    if status < 400:
        return

    message = f"{context} failed ({status}): {_error_message(response)}"
    if status in (401, 403):
        raise AuthenticationError(message)
    if status == 400:
        for error in _error_body(response).get("errors", []):
            if isinstance(error, dict) and error.get("code") == _DUPLICATE_FIELD:
                raise DuplicateFieldError(message, field=error.get("field"), status=status)
        raise CatalogRejectedError(message, status=status, detail=_error_message(response))
    if status >= 500 or status == 429:
        raise TransientCatalogError(message)
    raise CatalogError(message)
