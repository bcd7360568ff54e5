"""Pydantic models shared across restwrap.

Two shapes flow through the client:

* :class:`ClientConfig` -- connection and caching settings owned by a single
  client instance.
* :class:`RequestOptions` -- the per-call options (method, body, headers),
  validated and defaulted before a request reaches the cache policy.

:class:`HTTPMethod` enumerates the verbs the client accepts.
"""

from __future__ import annotations

import enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


DEFAULT_CACHE_TTL_MS = 300_000


class HTTPMethod(str, enum.Enum):
    """HTTP methods accepted by :meth:`~restwrap.client.SyncClient.request`.

    Only ``GET`` is cacheable; the rest are mutating calls.
    """

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"

    @property
    def is_mutating(self) -> bool:
        return self is not HTTPMethod.GET


class ClientConfig(BaseModel):
    """Connection settings held by one client instance.

    ``api_key`` and ``base_url`` may be replaced after construction through
    the client's setters; ``cache_ttl`` is fixed once the client exists.

    Example::

        ClientConfig(
            api_key="secret",
            base_url="https://api.example.com/v1",
            cache_ttl=60_000,
        )
    """

    model_config = ConfigDict(validate_assignment=True)

    api_key: str = Field(default="", description="API key sent with every request")
    base_url: str = Field(default="", description="Prefix for every endpoint")
    cache_ttl: int = Field(
        default=DEFAULT_CACHE_TTL_MS, ge=0, description="Cache TTL in milliseconds"
    )
    api_key_header: str = Field(
        default="X-API-Key", min_length=1, description="Header carrying the API key"
    )
    timeout: float = Field(default=30, gt=0, description="Request timeout in seconds")
    verify_ssl: bool = Field(default=True, description="Verify SSL certificates")


class RequestOptions(BaseModel):
    """Options for a single call to ``request()``.

    Unknown fields are rejected. ``method`` is case-insensitive and defaults
    to ``GET``.
    """

    model_config = ConfigDict(extra="forbid")

    method: HTTPMethod = HTTPMethod.GET
    body: Any = None
    headers: Optional[dict[str, str]] = None

    @field_validator("method", mode="before")
    @classmethod
    def _upper_method(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.upper()
        return value
