"""JSON-RPC 2.0 protocol layer for Odoo web controllers."""

from __future__ import annotations

import itertools
from typing import Any

from .models import Result

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

JSONRPC_VERSION = "2.0"

# Every Odoo web controller call uses the same JSON-RPC method name
CALL = "call"

# Controller sub-paths
CALL_KW_PATH = "/web/dataset/call_kw"
AUTHENTICATE_PATH = "/web/session/authenticate"

# Auto-incrementing request ID generator
_id_counter = itertools.count(1)


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class OdooError(Exception):
    """Client-side error carried as the ``error`` of a failed :class:`Result`."""

    def __init__(self, message: str, code: int | None = None) -> None:
        super().__init__(message)
        self.code = code


# ---------------------------------------------------------------------------
# Request / Response helpers
# ---------------------------------------------------------------------------


def build_request(
    params: dict[str, Any] | None = None,
    *,
    req_id: int | None = None,
) -> dict[str, Any]:
    """Build a JSON-RPC 2.0 request envelope.

    Args:
        params: The ``params`` object (a call_kw payload or credentials).
        req_id: Explicit request ID.  Auto-generated if omitted.

    Returns:
        A dict ready for ``json.dumps()``.
    """
    return {
        "jsonrpc": JSONRPC_VERSION,
        "id": req_id if req_id is not None else next(_id_counter),
        "method": CALL,
        "params": params or {},
    }


def build_call_kw(
    model: str,
    method: str,
    args: list[Any] | None = None,
    kwargs: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Build the ``params`` object for ``/web/dataset/call_kw``."""
    return {
        "model": model,
        "method": method,
        "args": list(args) if args is not None else [],
        "kwargs": dict(kwargs or {}),
    }


def with_context(context: dict[str, Any] | None, **fields: Any) -> dict[str, Any]:
    """Assemble call kwargs, dropping every entry whose value is ``None``."""
    kwargs = {"context": context, **fields}
    return {key: value for key, value in kwargs.items() if value is not None}


def normalize_response(data: Any) -> Result:
    """Turn a decoded JSON-RPC response body into a :class:`Result`.

    An ``error`` member is passed through untouched; otherwise the
    ``result`` member becomes the data.

    Raises:
        OdooError: If the body is not a JSON object.
    """
    if not isinstance(data, dict):
        msg = f"Invalid JSON-RPC response: expected an object, got {type(data).__name__}"
        raise OdooError(msg)

    if data.get("error"):
        return Result.fail(data["error"])

    return Result.ok(data.get("result"))
