# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""CRUD store: grid data operations over one REST resource.

Example::

    async with create_store("https://api.example.com/users") as store:
        page = await store.load({"filter": ["age", ">=", 18], "take": 20})
        user = await store.insert({"name": "Alice"})
        await store.update(user["id"], {"name": "Alicia"})
        await store.remove(user["id"])

Each operation sends exactly one request. Nothing is retried or cached.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import timedelta
from typing import Any
from urllib.parse import quote

import httpx
import structlog

from crudstore.config.properties.store import StoreProperties
from crudstore.core.config import Config
from crudstore.kernel.exceptions import (
    HttpStatusException,
    ResponseFormatException,
    TransportException,
)
from crudstore.query.assembler import LoadOptions, QueryAssembler
from crudstore.store.adapters.httpx_adapter import HttpxClientAdapter
from crudstore.store.ports.outbound import HttpClientPort
from crudstore.store.result import LoadResult

logger = structlog.get_logger("crudstore.store")

# characters encodeURIComponent leaves alone besides alphanumerics and "-_."
_KEY_SAFE = "!~*'()"


class CrudStore:
    """Grid data source backed by a NestJS CRUD style endpoint.

    Args:
        properties: Resource URL, key field and query defaults.
        client: HTTP client to send requests through. When omitted an
            httpx client is created and closed by :meth:`close`.
        assembler: Query assembler; defaults to one configured from
            *properties*.
    """

    def __init__(
        self,
        properties: StoreProperties,
        client: HttpClientPort | None = None,
        assembler: QueryAssembler | None = None,
    ) -> None:
        if not properties.url:
            raise ValueError("StoreProperties.url must not be empty")
        self._properties = properties
        self._owns_client = client is None
        if client is None:
            client = HttpxClientAdapter(
                timeout=timedelta(seconds=properties.timeout),
                headers=dict(properties.headers),
            )
        self._client = client
        self._assembler = assembler or QueryAssembler(
            join=tuple(properties.join),
            cache=properties.cache,
            include_deleted=properties.include_deleted,
        )

    @classmethod
    def from_config(cls, config: Config, client: HttpClientPort | None = None) -> CrudStore:
        """Build a store from the ``crudstore.store`` config section."""
        return cls(config.bind(StoreProperties), client=client)

    @property
    def url(self) -> str:
        return self._properties.url

    @property
    def key(self) -> str:
        return self._properties.key or "id"

    @property
    def options(self) -> dict[str, Any]:
        """Settings passed through untouched for the caller's collaborators."""
        return self._properties.options

    # -- read ---------------------------------------------------------------

    async def load(self, options: LoadOptions | Mapping[str, Any] | None = None) -> LoadResult[Any]:
        """Fetch one page of records matching *options*."""
        body = await self._send("GET", self._listing_url(self._assembler.compile(options)))
        return LoadResult.from_body(body)

    async def by_key(self, key: Any) -> LoadResult[Any]:
        """Fetch the record(s) whose key field equals *key*."""
        return await self.load(LoadOptions(filter=[self.key, "=", key]))

    async def total_count(self, options: LoadOptions | Mapping[str, Any] | None = None) -> int:
        """Count the records matching *options*.

        The page size is forced to 1 whatever *options* says; only the
        envelope's ``total`` is returned.
        """
        query = self._assembler.compile(LoadOptions.of(options).with_take(1))
        body = await self._send("GET", self._listing_url(query))
        if not isinstance(body, Mapping) or not isinstance(body.get("total"), int):
            raise ResponseFormatException(
                "Expected an envelope with an integer 'total'",
                context={"url": self.url},
            )
        return body["total"]

    # -- write --------------------------------------------------------------

    async def insert(self, values: Mapping[str, Any]) -> Any:
        """Create a record; returns the backend's response body."""
        return await self._send("POST", self.url, json=dict(values))

    async def update(self, key: Any, values: Mapping[str, Any]) -> Any:
        """Partially update the record identified by *key*."""
        return await self._send("PATCH", self._record_url(key), json=dict(values))

    async def remove(self, key: Any) -> Any:
        """Delete the record identified by *key*."""
        return await self._send("DELETE", self._record_url(key))

    # -- lifecycle ----------------------------------------------------------

    async def close(self) -> None:
        """Close the HTTP client if this store created it."""
        if self._owns_client:
            await self._client.close()

    async def __aenter__(self) -> CrudStore:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    # -- internals ----------------------------------------------------------

    def _listing_url(self, query: str) -> str:
        return f"{self.url}?{query}" if query else self.url

    def _record_url(self, key: Any) -> str:
        return f"{self.url.rstrip('/')}/{quote(str(key), safe=_KEY_SAFE)}"

    async def _send(self, method: str, url: str, **kwargs: Any) -> Any:
        try:
            response = await self._client.request(method, url, **kwargs)
        except (httpx.TransportError, OSError) as exc:
            logger.warning(
                "crud_request_failed",
                method=method,
                url=url,
                error=str(exc),
                error_type=type(exc).__name__,
            )
            raise TransportException(method, url, str(exc) or type(exc).__name__) from exc

        logger.debug("crud_request", method=method, url=url, status_code=response.status_code)
        return self._handle_response(method, url, response)

    @staticmethod
    def _handle_response(method: str, url: str, response: Any) -> Any:
        status = response.status_code
        if not 200 <= status < 300:
            payload = _json_or_none(response)
            raise HttpStatusException(
                status,
                _error_message(payload) or response.reason_phrase or f"HTTP {status}",
                payload=payload,
                context={"method": method, "url": url},
            )

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise ResponseFormatException(
                "Response body is not valid JSON",
                context={"method": method, "url": url, "status_code": status},
            ) from exc


def _json_or_none(response: Any) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return None


def _error_message(payload: Any) -> str | None:
    """Pick the message out of a NestJS error body."""
    if not isinstance(payload, Mapping):
        return None
    message = payload.get("message")
    if isinstance(message, list):
        message = "; ".join(str(m) for m in message)
    if message:
        return str(message)
    error = payload.get("error")
    return str(error) if error else None


def create_store(
    options: str | Mapping[str, Any] | StoreProperties,
    client: HttpClientPort | None = None,
) -> CrudStore:
    """Create a store from a URL, an options mapping or StoreProperties."""
    if not isinstance(options, StoreProperties):
        options = StoreProperties.from_options(options)
    return CrudStore(options, client=client)
