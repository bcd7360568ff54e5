"""State and request preparation shared by the sync and async clients.

:class:`BaseClient` owns one :class:`~restwrap.models.ClientConfig` and one
:class:`~restwrap.cache.ResponseCache`. It validates endpoints and options,
builds the outgoing URL and headers, and exposes the ``api_key`` /
``base_url`` setters. The cache policy itself lives in the concrete
clients' ``request`` methods.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Callable, Optional, Union

from pydantic import ValidationError as PydanticValidationError

from restwrap.cache import ResponseCache
from restwrap.exceptions import ConfigError, ValidationError
from restwrap.models import ClientConfig, RequestOptions
from restwrap.output import get_output

OptionsLike = Union[RequestOptions, Mapping[str, Any], None]

# Distinguishes a cache miss from a cached ``None`` payload.
MISSING = object()


class BaseClient:
    """Configuration, cache ownership and request preparation.

    Args:
        config: Full client configuration. When omitted one is built from
            the keyword arguments.
        api_key: API key sent in ``config.api_key_header`` on every call.
        base_url: Prefix prepended to every endpoint.
        cache_ttl: Cache time-to-live in milliseconds.
        clock: Clock for the owned cache (seconds; tests only).
    """

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        *,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        cache_ttl: Optional[int] = None,
        clock: Optional[Callable[[], float]] = None,
    ) -> None:
        overrides = {
            key: value
            for key, value in (
                ("api_key", api_key),
                ("base_url", base_url),
                ("cache_ttl", cache_ttl),
            )
            if value is not None
        }
        try:
            if config is None:
                config = ClientConfig(**overrides)
            else:
                # Copy so that setters never reach back into the caller's object.
                config = ClientConfig(**{**config.model_dump(), **overrides})
        except PydanticValidationError as exc:
            raise ValidationError(f"Invalid client configuration: {exc}") from exc

        self._config = config
        self._cache = ResponseCache(config.cache_ttl, clock=clock)

    # ------------------------------------------------------------------ #
    # Configuration
    # ------------------------------------------------------------------ #

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def cache(self) -> ResponseCache:
        return self._cache

    @property
    def api_key(self) -> str:
        return self._config.api_key

    @api_key.setter
    def api_key(self, value: str) -> None:
        self._set_config("api_key", value)

    @property
    def base_url(self) -> str:
        return self._config.base_url

    @base_url.setter
    def base_url(self, value: str) -> None:
        self._set_config("base_url", value)

    @property
    def cache_ttl(self) -> int:
        """Cache TTL in milliseconds, fixed at construction."""
        return self._config.cache_ttl

    def clear_cache(self) -> None:
        """Drop every cached response."""
        self._cache.clear()
        get_output().debug("Cache cleared")

    def _set_config(self, field: str, value: Any) -> None:
        try:
            setattr(self._config, field, value)
        except PydanticValidationError as exc:
            raise ValidationError(f"Invalid value for {field}: {exc}") from exc

    # ------------------------------------------------------------------ #
    # Request preparation
    # ------------------------------------------------------------------ #

    @staticmethod
    def _check_endpoint(endpoint: Any) -> str:
        if not isinstance(endpoint, str) or not endpoint:
            raise ValidationError("Endpoint must be a non-empty string")
        if not endpoint.startswith("/"):
            endpoint = f"/{endpoint}"
        return endpoint

    @staticmethod
    def _resolve_options(options: OptionsLike, overrides: dict[str, Any]) -> RequestOptions:
        """Validate and default the per-call options.

        *options* may be a :class:`RequestOptions`, a plain mapping, or
        ``None``; keyword *overrides* take precedence over it.
        """
        if isinstance(options, RequestOptions):
            fields: dict[str, Any] = options.model_dump(exclude_unset=True)
        elif options is None:
            fields = {}
        elif isinstance(options, Mapping):
            fields = dict(options)
        else:
            raise ValidationError(
                f"Request options must be a mapping, got {type(options).__name__}"
            )
        fields.update(overrides)
        try:
            return RequestOptions(**fields)
        except PydanticValidationError as exc:
            raise ValidationError(f"Invalid request options: {exc}") from exc

    def _build_url(self, endpoint: str) -> str:
        if not self._config.base_url:
            raise ConfigError("No base_url configured; set it before issuing requests")
        return f"{self._config.base_url.rstrip('/')}{endpoint}"

    def _build_headers(self, options: RequestOptions) -> dict[str, str]:
        """Merge default, caller and auth headers.

        The API key header always carries the key configured at call time,
        even when the caller passed a header of the same name.
        """
        headers: dict[str, str] = {"Accept": "application/json"}
        headers.update(options.headers or {})
        if self._config.api_key:
            key_header = self._config.api_key_header.lower()
            for name in [h for h in headers if h.lower() == key_header]:
                del headers[name]
            headers[self._config.api_key_header] = self._config.api_key
        return headers
