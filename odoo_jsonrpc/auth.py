"""Authentication strategies: static token and session cookie."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import Any

from .config import ClientConfig
from .models import AuthState

logger = logging.getLogger(__name__)

SESSION_COOKIE = "session_id"
TOKEN_HEADER = "X-Auth-Token"


def parse_session_cookie(set_cookie: Iterable[str]) -> tuple[str, str] | None:
    """Find the session cookie among ``Set-Cookie`` header values.

    Returns:
        ``(cookie, sid)`` where *cookie* is ready for a ``Cookie`` header
        (``"session_id=<sid>"``), or ``None`` if no session cookie was set.
    """
    for header in set_cookie:
        for part in header.split(";"):
            name, sep, value = part.strip().partition("=")
            if sep and name == SESSION_COOKIE and value:
                return f"{SESSION_COOKIE}={value}", value
    return None


# ---------------------------------------------------------------------------
# Abstract base
# ---------------------------------------------------------------------------


class AuthStrategy(ABC):
    """Produces the auth headers attached to every request."""

    @abstractmethod
    def headers(self) -> dict[str, str]:
        """Return the auth headers for the next request."""

    @abstractmethod
    def set_token(self, token: str | None) -> None:
        """Replace the static auth token."""

    @property
    @abstractmethod
    def state(self) -> AuthState: ...


# ---------------------------------------------------------------------------
# Static token
# ---------------------------------------------------------------------------


class TokenAuth(AuthStrategy):
    """Sends ``X-Auth-Token`` when a token is set, nothing otherwise."""

    def __init__(self, token: str | None = None) -> None:
        self.token = token

    def headers(self) -> dict[str, str]:
        if self.token:
            return {TOKEN_HEADER: self.token}
        return {}

    def set_token(self, token: str | None) -> None:
        self.token = token

    @property
    def state(self) -> AuthState:
        if self.token:
            return AuthState.TOKEN_AUTHENTICATED
        return AuthState.UNAUTHENTICATED


# ---------------------------------------------------------------------------
# Session cookie
# ---------------------------------------------------------------------------


class SessionAuth(TokenAuth):
    """Credential login with a captured session cookie.

    The cookie is replayed while ``use_cookie`` is set.  Setting a static
    token switches the strategy to the token header and drops the cookie;
    clearing it again brings the cookie back.
    """

    def __init__(
        self,
        username: str | None = None,
        password: str | None = None,
        database: str | None = None,
        session_id: str | None = None,
        token: str | None = None,
    ) -> None:
        super().__init__(token)
        self.username = username
        self.password = password
        self.database = database
        self.uid: int | None = None
        self.user_context: dict[str, Any] = {}
        self.session_id = session_id
        self.cookie: str | None = f"{SESSION_COOKIE}={session_id}" if session_id else None
        self.use_cookie = token is None

    @classmethod
    def from_config(cls, config: ClientConfig) -> SessionAuth:
        return cls(
            username=config.username,
            password=config.password,
            database=config.database,
            session_id=config.session_id,
            token=config.token,
        )

    def headers(self) -> dict[str, str]:
        if self.use_cookie:
            return {"Cookie": self.cookie} if self.cookie else {}
        return super().headers()

    def set_token(self, token: str | None) -> None:
        # Clearing the token falls back to the session cookie
        self.token = token
        self.use_cookie = token is None

    def credentials(self) -> dict[str, Any]:
        """Params for ``/web/session/authenticate``."""
        return {"db": self.database, "login": self.username, "password": self.password}

    def apply_login(self, result: dict[str, Any], set_cookie: Iterable[str]) -> None:
        """Overwrite session fields from a successful authenticate call."""
        parsed = parse_session_cookie(set_cookie)
        sid = parsed[1] if parsed is not None else None
        self.session_id = result.get("session_id") or sid
        if parsed is not None:
            self.cookie = parsed[0]
        elif self.session_id:
            self.cookie = f"{SESSION_COOKIE}={self.session_id}"
        else:
            logger.warning("Authenticate response carried no session cookie")

        self.uid = result.get("uid")
        self.user_context = result.get("user_context") or {}
        # The server may normalize the login (case, whitespace)
        self.username = result.get("username") or self.username
        self.use_cookie = True

    @property
    def state(self) -> AuthState:
        if not self.use_cookie and self.token:
            return AuthState.TOKEN_AUTHENTICATED
        if self.cookie:
            return AuthState.AUTHENTICATED
        return AuthState.UNAUTHENTICATED
