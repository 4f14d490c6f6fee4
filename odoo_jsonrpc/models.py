"""Data models shared across the client."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import asdict, dataclass
from dataclasses import fields as dataclass_fields
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)

# A domain is a list of [field, operator, value] clauses
Domain = list[list[Any]]


class AuthState(str, Enum):
    UNAUTHENTICATED = "unauthenticated"
    AUTHENTICATED = "authenticated"
    TOKEN_AUTHENTICATED = "token_authenticated"


@dataclass
class QueryParams:
    """Options bag for read-style calls.

    Every field is optional.  Fields left at ``None`` are never sent.
    """

    domain: Domain | None = None
    ids: list[int] | None = None
    fields: list[str] | None = None
    offset: int | None = None
    limit: int | None = None
    order: str | None = None
    groupby: str | list[str] | None = None
    lazy: bool | None = None

    @classmethod
    def coerce(cls, value: QueryParams | Mapping[str, Any] | None) -> QueryParams:
        """Accept a :class:`QueryParams`, a plain mapping, or ``None``.

        Keys that are not query parameters are left out.
        """
        if value is None:
            return cls()
        if isinstance(value, cls):
            return value
        known = {f.name for f in dataclass_fields(cls)}
        unknown = sorted(set(value) - known)
        if unknown:
            logger.debug("Ignoring unknown query parameter(s): %s", ", ".join(unknown))
        return cls(**{key: val for key, val in value.items() if key in known})

    def to_kwargs(self) -> dict[str, Any]:
        """Return the set fields only, in declaration order."""
        return {key: value for key, value in asdict(self).items() if value is not None}


@dataclass
class Result:
    """Uniform outcome of every public client operation."""

    success: bool
    data: Any = None
    error: Any = None

    @classmethod
    def ok(cls, data: Any) -> Result:
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error: Any) -> Result:
        return cls(success=False, error=error)

    def to_dict(self) -> dict[str, Any]:
        if self.success:
            return {"success": True, "data": self.data}
        return {"success": False, "error": self.error}
