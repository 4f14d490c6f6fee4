"""Shared fixtures for odoo-jsonrpc tests.

Provides a recording FakeTransport that stands in for the HTTP layer,
sys.path setup so the package imports from a plain checkout, and client
factories for both authentication flavors.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

import pytest

# ---------------------------------------------------------------------------
# Import path setup: make the package importable without installing it
# ---------------------------------------------------------------------------

_REPO_ROOT = Path(__file__).resolve().parent.parent
if str(_REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(_REPO_ROOT))

from odoo_jsonrpc.client import OdooClient  # noqa: E402
from odoo_jsonrpc.config import ClientConfig  # noqa: E402
from odoo_jsonrpc.transport import Transport, TransportResponse  # noqa: E402

BASE_URL = "https://erp.example.com"


# ---------------------------------------------------------------------------
# FakeTransport
# ---------------------------------------------------------------------------


class FakeTransport(Transport):
    """Records every POST and answers from a queue of canned responses.

    Queue entries are response bodies, :class:`TransportResponse` objects,
    or exceptions (raised instead of answering).  When the queue is empty
    the default body ``{"jsonrpc": "2.0", "id": 1, "result": True}`` is used.
    """

    def __init__(self) -> None:
        self.calls: list[dict[str, Any]] = []
        self.responses: list[Any] = []

    def queue(self, *responses: Any) -> None:
        self.responses.extend(responses)

    async def post(
        self,
        url: str,
        payload: dict[str, Any],
        headers: dict[str, str] | None = None,
    ) -> TransportResponse:
        self.calls.append({"url": url, "payload": payload, "headers": dict(headers or {})})
        reply = self.responses.pop(0) if self.responses else {"jsonrpc": "2.0", "id": 1, "result": True}
        if isinstance(reply, BaseException):
            raise reply
        if isinstance(reply, TransportResponse):
            return reply
        return TransportResponse(status=200, body=reply)

    @property
    def last(self) -> dict[str, Any]:
        return self.calls[-1]

    @property
    def last_params(self) -> dict[str, Any]:
        return self.calls[-1]["payload"]["params"]


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def transport() -> FakeTransport:
    """Return a fresh FakeTransport for each test."""
    return FakeTransport()


@pytest.fixture()
def token_client(transport: FakeTransport) -> OdooClient:
    """Client using the static-token flavor."""
    return OdooClient(ClientConfig(url=BASE_URL, token="tok123"), transport=transport)


@pytest.fixture()
def session_client(transport: FakeTransport) -> OdooClient:
    """Client using the session-cookie flavor, not yet connected."""
    config = ClientConfig(url=BASE_URL, database="prod", username="admin", password="secret")
    return OdooClient(config, transport=transport)
