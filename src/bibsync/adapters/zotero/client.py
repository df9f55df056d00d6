"""HTTP client for the Zotero Web API."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

import httpx

from bibsync.adapters.http_resilience import ResilientClient

from .schema import (
    DeletedPayload,
    GroupPayload,
    ItemPayload,
    KeyInfo,
)

if TYPE_CHECKING:
    from collections.abc import Callable

    from bibsync.config.http_resilience import ResilienceConfig
    from bibsync.config.zotero import ZoteroConfig

log = getLogger(__name__)

PAGE_SIZE = 100
VERSION_HEADER = "Last-Modified-Version"
TOTAL_HEADER = "Total-Results"


class ZoteroAPIError(RuntimeError):
    """Raised when the Zotero API rejects a request or answers unexpectedly."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


@dataclass(frozen=True, slots=True)
class ItemPage:
    entries: list[ItemPayload]
    total: int


class ZoteroClient:
    """Low-level HTTP client for the Zotero Web API v3."""

    def __init__(
        self,
        *,
        config: ZoteroConfig,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._config = config
        self._resilience = config.resilience
        self._client_factory = client_factory or ResilientClient

    def current_key(self) -> KeyInfo:
        return asyncio.run(self._current_key_async())

    def groups(self, user_id: int) -> list[GroupPayload]:
        return asyncio.run(self._groups_async(user_id))

    def library_version(self, prefix: str) -> int:
        return asyncio.run(self._library_version_async(prefix))

    def deleted(self, prefix: str, *, since: int) -> DeletedPayload:
        return asyncio.run(self._deleted_async(prefix, since=since))

    def items(self, prefix: str, *, since: int) -> list[ItemPayload]:
        return asyncio.run(self._list_all_async(f"{prefix}/items", since=since, sort=True))

    def collections(self, prefix: str, *, since: int) -> list[ItemPayload]:
        return asyncio.run(self._list_all_async(f"{prefix}/collections", since=since, sort=False))

    async def _current_key_async(self) -> KeyInfo:
        async with self._client_factory(self._resilience) as client:
            response = await self._perform_request(client=client, path="/keys/current")
        return KeyInfo.model_validate(self._json(response, dict))

    async def _groups_async(self, user_id: int) -> list[GroupPayload]:
        async with self._client_factory(self._resilience) as client:
            response = await self._perform_request(client=client, path=f"/users/{user_id}/groups")
        return [GroupPayload.model_validate(entry) for entry in self._json(response, list)]

    async def _library_version_async(self, prefix: str) -> int:
        async with self._client_factory(self._resilience) as client:
            response = await self._perform_request(
                client=client,
                path=f"{prefix}/items",
                params={"limit": "1", "format": "versions"},
            )
        return self._version(response)

    async def _deleted_async(self, prefix: str, *, since: int) -> DeletedPayload:
        async with self._client_factory(self._resilience) as client:
            response = await self._perform_request(
                client=client, path=f"{prefix}/deleted", params={"since": str(since)}
            )
        return DeletedPayload.model_validate(self._json(response, dict))

    async def _list_all_async(self, path: str, *, since: int, sort: bool) -> list[ItemPayload]:
        entries: list[ItemPayload] = []
        start = 0
        async with self._client_factory(self._resilience) as client:
            while True:
                page = await self._request_page(
                    client=client, path=path, since=since, start=start, sort=sort
                )
                entries.extend(page.entries)
                start += len(page.entries)
                log.debug("Fetched %s/%s entries of %s", start, page.total, path)
                if not page.entries or start >= page.total:
                    break
        return entries

    async def _request_page(
        self,
        *,
        client: ResilientClient,
        path: str,
        since: int,
        start: int,
        sort: bool,
    ) -> ItemPage:
        params: dict[str, str] = {
            "since": str(since),
            "start": str(start),
            "limit": str(PAGE_SIZE),
        }
        if sort:
            # resuming an interrupted sync relies on a stable order
            params["sort"] = "dateAdded"
            params["direction"] = "asc"
        response = await self._perform_request(client=client, path=path, params=params)
        entries = [ItemPayload.model_validate(entry) for entry in self._json(response, list)]
        total_header = response.headers.get(TOTAL_HEADER)
        total = int(total_header) if total_header is not None else start + len(entries)
        return ItemPage(entries=entries, total=total)

    async def _perform_request(
        self,
        *,
        client: ResilientClient,
        path: str,
        params: dict[str, str] | None = None,
    ) -> httpx.Response:
        if self._resilience.base_url is None:
            raise ZoteroAPIError("Missing Zotero base_url in resilience configuration")
        response = await client.get(path, params=params)
        if response.status_code == httpx.codes.FORBIDDEN:
            raise ZoteroAPIError(
                f"Access to {path} denied; check ZOTERO_API_KEY", status_code=response.status_code
            )
        if response.is_error:
            log.error("Zotero API error %s on %s: %s", response.status_code, path, response.text)
            raise ZoteroAPIError(
                f"Zotero API returned {response.status_code} for {path}",
                status_code=response.status_code,
            )
        return response

    @staticmethod
    def _json[T](response: httpx.Response, expected: type[T]) -> T:
        payload = response.json()
        if not isinstance(payload, expected):
            raise ZoteroAPIError(
                f"Unexpected Zotero response payload for {response.request.url.path}"
            )
        return payload

    @staticmethod
    def _version(response: httpx.Response) -> int:
        raw = response.headers.get(VERSION_HEADER)
        if raw is None:
            raise ZoteroAPIError(f"Zotero response without {VERSION_HEADER} header")
        return int(raw)
