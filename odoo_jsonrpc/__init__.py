"""Async client for the Odoo JSON-RPC web API.

Maps ``search``/``search_read``/``read``/``read_group``/``create``/``write``/
``unlink`` onto ``/web/dataset/call_kw`` and normalizes every response into
a :class:`Result`.  Supports static-token and session-cookie authentication.
"""

from __future__ import annotations

from .auth import AuthStrategy, SessionAuth, TokenAuth
from .client import OdooClient, create_client
from .config import ClientConfig, load_client_config, load_config
from .models import AuthState, QueryParams, Result
from .protocol import OdooError
from .transport import HTTPTransport, Transport, TransportResponse

__all__ = [
    "AuthState",
    "AuthStrategy",
    "ClientConfig",
    "HTTPTransport",
    "OdooClient",
    "OdooError",
    "QueryParams",
    "Result",
    "SessionAuth",
    "TokenAuth",
    "Transport",
    "TransportResponse",
    "create_client",
    "load_client_config",
    "load_config",
]
