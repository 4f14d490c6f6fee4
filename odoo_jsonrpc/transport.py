"""HTTP transport layer: abstract base and aiohttp implementation."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

logger = logging.getLogger(__name__)

BASE_HEADERS = {
    "Content-Type": "application/json",
    "Accept": "application/json",
}


@dataclass
class TransportResponse:
    """Decoded response body plus the headers the client cares about."""

    status: int
    body: Any
    set_cookie: list[str] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Abstract base
# ---------------------------------------------------------------------------


class Transport(ABC):
    """Abstract base class for JSON-over-HTTP transports."""

    @abstractmethod
    async def post(
        self,
        url: str,
        payload: dict[str, Any],
        headers: dict[str, str] | None = None,
    ) -> TransportResponse:
        """POST *payload* as JSON and return the decoded response.

        Raises:
            Exception: Any network or decoding failure propagates.
        """


# ---------------------------------------------------------------------------
# aiohttp
# ---------------------------------------------------------------------------


class HTTPTransport(Transport):
    """Each request is a POST of JSON to *url* on a fresh client session.

    The session uses a ``DummyCookieJar``: cookies the server sets are never
    stored or replayed.  Auth travels only in the explicit *headers*.
    """

    async def post(
        self,
        url: str,
        payload: dict[str, Any],
        headers: dict[str, str] | None = None,
    ) -> TransportResponse:
        import aiohttp

        request_headers = {**BASE_HEADERS, **(headers or {})}

        async with aiohttp.ClientSession(cookie_jar=aiohttp.DummyCookieJar()) as session:
            async with session.post(url, json=payload, headers=request_headers) as resp:
                # Odoo reports RPC errors in the body, often with a 200 status
                body = await resp.json(content_type=None)
                logger.debug("POST %s -> HTTP %s", url, resp.status)
                return TransportResponse(
                    status=resp.status,
                    body=body,
                    set_cookie=resp.headers.getall("Set-Cookie", []),
                )
