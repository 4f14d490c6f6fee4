"""Odoo JSON-RPC client.

Every public coroutine returns a :class:`~odoo_jsonrpc.models.Result` and
never raises for RPC or transport failures.  ``update()`` and ``delete()``
return ``None`` without sending anything when no ids are given.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import replace
from typing import Any

from .auth import AuthStrategy, SessionAuth, TokenAuth
from .config import ClientConfig, load_client_config
from .models import AuthState, QueryParams, Result
from .protocol import (
    AUTHENTICATE_PATH,
    CALL_KW_PATH,
    OdooError,
    build_call_kw,
    build_request,
    normalize_response,
    with_context,
)
from .transport import HTTPTransport, Transport, TransportResponse

__all__ = ["OdooClient", "create_client"]

logger = logging.getLogger(__name__)

Params = QueryParams | Mapping[str, Any] | None

BROWSE_ALL_DOMAIN: list[list[Any]] = [["id", ">", 0]]


class OdooClient:
    """Thin async wrapper over ``/web/dataset/call_kw``.

    Authentication is delegated to an :class:`AuthStrategy`: a
    :class:`TokenAuth` for static tokens, or a :class:`SessionAuth` that
    logs in via :meth:`connect` and replays the session cookie.
    """

    def __init__(
        self,
        config: ClientConfig,
        auth: AuthStrategy | None = None,
        transport: Transport | None = None,
    ) -> None:
        self.config = config
        if auth is None:
            auth = SessionAuth.from_config(config) if config.uses_session else TokenAuth(config.token)
        self.auth = auth
        self._transport = transport or HTTPTransport()

    @property
    def state(self) -> AuthState:
        return self.auth.state

    def set_token(self, token: str | None) -> None:
        """Attach ``X-Auth-Token: <token>`` to subsequent calls."""
        self.auth.set_token(token)

    # -- Session ------------------------------------------------------------

    async def connect(
        self,
        username: str | None = None,
        password: str | None = None,
        database: str | None = None,
    ) -> Result:
        """Log in with credentials and capture the session cookie.

        Explicit arguments override the configured credentials.  Session
        fields are only overwritten when the server accepts the login.
        """
        if not isinstance(self.auth, SessionAuth):
            return Result.fail(OdooError("connect() requires session authentication"))

        session = self.auth
        if username is not None:
            session.username = username
        if password is not None:
            session.password = password
        if database is not None:
            session.database = database

        try:
            response = await self._post(AUTHENTICATE_PATH, session.credentials(), headers={})
            result = normalize_response(response.body)
        except Exception as exc:
            logger.warning("Authenticate request to %s failed: %s", self.config.base_url, exc)
            return Result.fail(exc)

        if not result.success:
            logger.warning("Authentication rejected for %s: %s", session.username, result.error)
            return result

        session.apply_login(result.data or {}, response.set_cookie)
        logger.info("Authenticated %s on %s (uid=%s)", session.username, self.config.base_url, session.uid)
        return result

    # -- Read ---------------------------------------------------------------

    async def search(self, model: str, params: Params = None, context: dict[str, Any] | None = None) -> Result:
        """Return the ids matching ``params.domain``."""
        query = QueryParams.coerce(params)
        return await self._call_kw(model, "search", [query.domain], with_context(self._context(context)))

    async def search_read(
        self, model: str, params: Params = None, context: dict[str, Any] | None = None
    ) -> Result:
        query = QueryParams.coerce(params)
        kwargs = with_context(
            self._context(context),
            domain=query.domain,
            offset=query.offset,
            limit=query.limit,
            order=query.order,
            fields=query.fields,
        )
        return await self._call_kw(model, "search_read", [], kwargs)

    async def get(self, model: str, params: Params = None, context: dict[str, Any] | None = None) -> Result:
        """Read ``params.fields`` of the records in ``params.ids``."""
        query = QueryParams.coerce(params)
        kwargs = with_context(self._context(context), fields=query.fields)
        return await self._call_kw(model, "read", [query.ids], kwargs)

    async def read_group(
        self, model: str, params: Params = None, context: dict[str, Any] | None = None
    ) -> Result:
        query = QueryParams.coerce(params)
        kwargs = with_context(
            self._context(context),
            domain=query.domain,
            fields=query.fields,
            groupby=query.groupby,
            lazy=query.lazy,
            order=query.order,
        )
        return await self._call_kw(model, "read_group", [], kwargs)

    async def browse_by_id(
        self, model: str, params: Params = None, context: dict[str, Any] | None = None
    ) -> Result:
        """``search_read`` over every record; any caller domain is replaced."""
        query = replace(QueryParams.coerce(params), domain=[list(c) for c in BROWSE_ALL_DOMAIN])
        return await self.search_read(model, query, context)

    # -- Write --------------------------------------------------------------

    async def create(
        self,
        model: str,
        values: Mapping[str, Any] | Sequence[Mapping[str, Any]],
        context: dict[str, Any] | None = None,
    ) -> Result:
        """Create one record, or several from a list of value dicts."""
        return await self._call_kw(model, "create", [values], with_context(self._context(context)))

    async def update(
        self,
        model: str,
        ids: Sequence[int] | None,
        values: Mapping[str, Any],
        context: dict[str, Any] | None = None,
    ) -> Result | None:
        # TODO: decide whether an empty id list should be reported as an error
        if not ids:
            logger.debug("Skipping write on %s: no ids", model)
            return None
        return await self._call_kw(
            model, "write", [ids, values], with_context(self._context(context))
        )

    async def delete(
        self, model: str, ids: Sequence[int] | None, context: dict[str, Any] | None = None
    ) -> Result | None:
        if not ids:
            logger.debug("Skipping unlink on %s: no ids", model)
            return None
        return await self._call_kw(model, "unlink", [ids], with_context(self._context(context)))

    # -- Generic ------------------------------------------------------------

    async def rpc_call(
        self,
        path: str,
        model: str,
        method: str,
        args: Sequence[Any] | None = None,
        params: Params = None,
    ) -> Result:
        """Call any controller path; *params* are spread into kwargs as-is."""
        if params is None or isinstance(params, QueryParams):
            kwargs = QueryParams.coerce(params).to_kwargs()
        else:
            kwargs = dict(params)
        return await self._request(path, build_call_kw(model, method, list(args or []), kwargs))

    # -- Private ------------------------------------------------------------

    def _context(self, context: dict[str, Any] | None) -> dict[str, Any] | None:
        if context is not None:
            return context
        return self.config.context or None

    async def _call_kw(
        self, model: str, method: str, args: list[Any], kwargs: dict[str, Any]
    ) -> Result:
        return await self._request(CALL_KW_PATH, build_call_kw(model, method, args, kwargs))

    async def _request(self, path: str, params: dict[str, Any]) -> Result:
        logger.debug("POST %s %s.%s", path, params.get("model"), params.get("method"))
        try:
            response = await self._post(path, params, headers=self.auth.headers())
            return normalize_response(response.body)
        except Exception as exc:
            logger.warning("Request to %s%s failed: %s", self.config.base_url, path, exc)
            return Result.fail(exc)

    async def _post(
        self, path: str, params: dict[str, Any], headers: dict[str, str]
    ) -> TransportResponse:
        url = f"{self.config.base_url}{path or '/'}"
        return await self._transport.post(url, build_request(params), headers=headers)


# ---------------------------------------------------------------------------
# Factory
# ---------------------------------------------------------------------------


def create_client(config: dict[str, Any], transport: Transport | None = None) -> OdooClient:
    """Create a client from a config dict.

    Config keys (under ``odoo``):
        url or host/port/protocol: Server endpoint.
        token: Static auth token (token flavor).
        username, password, database: Credentials (session flavor).
        session_id: Existing session to reuse (session flavor).
        context: Default context for dataset calls.
    """
    return OdooClient(load_client_config(config), transport=transport)
