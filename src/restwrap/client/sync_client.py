"""Synchronous client: the single funnel for every HTTP call.

:class:`SyncClient` decides per call whether the cache is involved:

- **GET** -- look up the fingerprint; on a hit return the cached payload
  without touching the network. On a miss call the transport and store the
  payload with the configured TTL.
- **POST / PUT / DELETE** -- never read the cache. Call the transport and,
  once it succeeds, clear the whole cache so collection endpoints cannot
  serve stale data.

Transport errors propagate unchanged. A failed GET stores nothing and a
failed mutation clears nothing.

See Also:
    :class:`~restwrap.client.async_client.AsyncClient` for the
    non-blocking equivalent.
"""

from __future__ import annotations

from typing import Any, Callable, Optional

import httpx

from restwrap.cache import make_fingerprint
from restwrap.client.base import MISSING, BaseClient, OptionsLike
from restwrap.models import ClientConfig
from restwrap.output import get_output
from restwrap.transport import HttpxTransport


class SyncClient(BaseClient):
    """Blocking API client with API-key auth and a TTL response cache.

    Args:
        config: Client configuration; alternatively pass ``api_key``,
            ``base_url`` and ``cache_ttl`` directly.
        transport: Object with a ``send(method, url, headers, body)`` method.
            Defaults to an :class:`~restwrap.transport.HttpxTransport`.
        http_transport: httpx transport handed to the default
            :class:`~restwrap.transport.HttpxTransport` (e.g.
            :class:`httpx.MockTransport` in tests).

    Example::

        with SyncClient(api_key="secret", base_url="https://api.example.com") as client:
            user = client.request("/users/123")
            client.request("/users/123", {"method": "PUT", "body": {"name": "B"}})
    """

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        *,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        cache_ttl: Optional[int] = None,
        clock: Optional[Callable[[], float]] = None,
        transport: Optional[Any] = None,
        http_transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        super().__init__(
            config,
            api_key=api_key,
            base_url=base_url,
            cache_ttl=cache_ttl,
            clock=clock,
        )
        if transport is None:
            transport = HttpxTransport(
                timeout=self._config.timeout,
                verify_ssl=self._config.verify_ssl,
                transport=http_transport,
            )
        self._transport = transport

    # ------------------------------------------------------------------ #
    # Context manager
    # ------------------------------------------------------------------ #

    def __enter__(self) -> SyncClient:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def close(self) -> None:
        """Release the transport's connections."""
        close = getattr(self._transport, "close", None)
        if close is not None:
            close()

    # ------------------------------------------------------------------ #
    # Public request methods
    # ------------------------------------------------------------------ #

    def request(self, endpoint: str, options: OptionsLike = None, **overrides: Any) -> Any:
        """Perform a call through the cache policy.

        Args:
            endpoint: Path appended to ``base_url``; may carry a query string.
            options: :class:`~restwrap.models.RequestOptions` or a mapping
                with ``method``, ``body`` and ``headers``.
            **overrides: Same fields as *options*, taking precedence.

        Returns:
            The parsed response payload.

        Raises:
            ValidationError: On an empty endpoint or invalid options.
            ConfigError: When no ``base_url`` is configured.
            TransportError: When the exchange fails.
        """
        endpoint = self._check_endpoint(endpoint)
        opts = self._resolve_options(options, overrides)
        method = opts.method.value
        output = get_output()

        if opts.method.is_mutating:
            payload = self._transport.send(
                method, self._build_url(endpoint), self._build_headers(opts), opts.body
            )
            self._cache.clear()
            output.debug(f"Cache cleared after {method} {endpoint}")
            return payload

        fingerprint = make_fingerprint(method, endpoint)
        cached = self._cache.get(fingerprint, MISSING)
        if cached is not MISSING:
            output.debug(f"Cache hit: {fingerprint}")
            return cached

        output.debug(f"Cache miss: {fingerprint}")
        payload = self._transport.send(
            method, self._build_url(endpoint), self._build_headers(opts), opts.body
        )
        self._cache.put(fingerprint, payload, self.cache_ttl)
        return payload

    def get(self, endpoint: str, **kwargs: Any) -> Any:
        return self.request(endpoint, method="GET", **kwargs)

    def post(self, endpoint: str, body: Any = None, **kwargs: Any) -> Any:
        return self.request(endpoint, method="POST", body=body, **kwargs)

    def put(self, endpoint: str, body: Any = None, **kwargs: Any) -> Any:
        return self.request(endpoint, method="PUT", body=body, **kwargs)

    def delete(self, endpoint: str, **kwargs: Any) -> Any:
        return self.request(endpoint, method="DELETE", **kwargs)
