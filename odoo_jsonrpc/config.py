"""Client configuration loading and validation."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

_PROTOCOLS = ("http", "https")


@dataclass(frozen=True)
class ClientConfig:
    """Connection settings for one Odoo server.

    Attributes:
        url: Full base endpoint (e.g. ``"https://erp.example.com"``).
            Takes precedence over ``host``/``port``/``protocol``.
        host: Server host name, used when ``url`` is not set.
        port: Optional server port.
        protocol: ``"http"`` or ``"https"``.
        token: Static auth token sent as ``X-Auth-Token``.
        database: Database name for session authentication.
        username: Login for session authentication.
        password: Password for session authentication.
        session_id: Existing session identifier to reuse.
        context: Default context sent with every dataset call.
    """

    url: str | None = None
    host: str | None = None
    port: int | None = None
    protocol: str = "http"
    token: str | None = None
    database: str | None = None
    username: str | None = None
    password: str | None = None
    session_id: str | None = None
    context: dict[str, Any] = field(default_factory=dict)

    @property
    def base_url(self) -> str:
        """Endpoint that every sub-path is appended to, without a trailing slash."""
        if self.url:
            return self.url.rstrip("/")
        netloc = self.host or ""
        if self.port is not None:
            netloc = f"{netloc}:{self.port}"
        return f"{self.protocol}://{netloc}"

    @property
    def uses_session(self) -> bool:
        return bool(self.username or self.session_id)


def load_config(config_path: str) -> dict[str, Any]:
    """Load a YAML config file, falling back to an empty dict if missing."""
    path = Path(config_path).expanduser()
    if not path.exists():
        logger.warning("Config file not found: %s, using defaults", path)
        return {}
    return yaml.safe_load(path.read_text()) or {}


def load_client_config(config: dict[str, Any]) -> ClientConfig:
    """Parse the ``odoo`` config section into a :class:`ClientConfig`.

    Args:
        config: The full config dict.  Expected shape::

            {"odoo": {"url": "...", "token": "...", ...}}

    Raises:
        ValueError: If no endpoint is configured, or port/protocol are invalid.
    """
    section = config.get("odoo", {}) or {}

    url = section.get("url")
    host = section.get("host")
    if not url and not host:
        msg = "Odoo config requires 'url' or 'host'"
        raise ValueError(msg)

    protocol = section.get("protocol", "http")
    if protocol not in _PROTOCOLS:
        msg = (
            f"Odoo config: unknown protocol '{protocol}'. "
            f"Supported: {', '.join(_PROTOCOLS)}"
        )
        raise ValueError(msg)

    port = section.get("port")
    if port is not None:
        try:
            port = int(port)
        except (TypeError, ValueError):
            msg = f"Odoo config: 'port' must be an integer, got {port!r}"
            raise ValueError(msg) from None

    return ClientConfig(
        url=url,
        host=host,
        port=port,
        protocol=protocol,
        token=section.get("token"),
        database=section.get("database"),
        username=section.get("username"),
        password=section.get("password"),
        session_id=section.get("session_id"),
        context=dict(section.get("context") or {}),
    )
