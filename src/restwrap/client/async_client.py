"""Asynchronous client -- mirrors :class:`~restwrap.client.sync_client.SyncClient`.

:class:`AsyncClient` applies the same cache policy but awaits an
:class:`~restwrap.transport.AsyncHttpxTransport`. Cache reads and writes
happen between awaits, so overlapping calls may race: two concurrent misses
on one fingerprint both reach the network and the later write wins. A clear
triggered by a mutation always runs after that mutation's own response.
"""

from __future__ import annotations

from typing import Any, Callable, Optional

import httpx

from restwrap.cache import make_fingerprint
from restwrap.client.base import MISSING, BaseClient, OptionsLike
from restwrap.models import ClientConfig
from restwrap.output import get_output
from restwrap.transport import AsyncHttpxTransport


class AsyncClient(BaseClient):
    """Non-blocking API client with API-key auth and a TTL response cache.

    Takes the same arguments as :class:`~restwrap.client.sync_client.SyncClient`;
    ``transport`` must provide an awaitable ``send``.

    Example::

        async with AsyncClient(api_key="secret", base_url="https://api.example.com") as client:
            user = await client.request("/users/123")
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
        http_transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        super().__init__(
            config,
            api_key=api_key,
            base_url=base_url,
            cache_ttl=cache_ttl,
            clock=clock,
        )
        if transport is None:
            transport = AsyncHttpxTransport(
                timeout=self._config.timeout,
                verify_ssl=self._config.verify_ssl,
                transport=http_transport,
            )
        self._transport = transport

    async def __aenter__(self) -> AsyncClient:
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        close = getattr(self._transport, "close", None)
        if close is not None:
            await close()

    async def request(self, endpoint: str, options: OptionsLike = None, **overrides: Any) -> Any:
        """Perform a call through the cache policy.

        Behaves like :meth:`~restwrap.client.sync_client.SyncClient.request`
        but awaits the transport.
        """
        endpoint = self._check_endpoint(endpoint)
        opts = self._resolve_options(options, overrides)
        method = opts.method.value
        output = get_output()

        if opts.method.is_mutating:
            payload = await self._transport.send(
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
        payload = await self._transport.send(
            method, self._build_url(endpoint), self._build_headers(opts), opts.body
        )
        self._cache.put(fingerprint, payload, self.cache_ttl)
        return payload

    async def get(self, endpoint: str, **kwargs: Any) -> Any:
        return await self.request(endpoint, method="GET", **kwargs)

    async def post(self, endpoint: str, body: Any = None, **kwargs: Any) -> Any:
        return await self.request(endpoint, method="POST", body=body, **kwargs)

    async def put(self, endpoint: str, body: Any = None, **kwargs: Any) -> Any:
        return await self.request(endpoint, method="PUT", body=body, **kwargs)

    async def delete(self, endpoint: str, **kwargs: Any) -> Any:
        return await self.request(endpoint, method="DELETE", **kwargs)
