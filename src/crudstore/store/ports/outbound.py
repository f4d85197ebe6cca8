"""Outbound port: HTTP client interface."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class HttpClientPort(Protocol):
    """Sends one HTTP request and returns an httpx-compatible response.

    The response must expose ``status_code``, ``reason_phrase``, ``content``
    and ``json()``.
    """

    async def request(self, method: str, url: str, **kwargs: Any) -> Any: ...

    async def close(self) -> None: ...
