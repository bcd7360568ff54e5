"""HTTP clients for restwrap.

Both clients funnel every call through one ``request`` method that applies
API-key auth and the response cache policy, then hand the exchange to a
transport built on :mod:`httpx`.

Classes:
    :class:`SyncClient` -- blocking client backed by :class:`httpx.Client`.
    :class:`AsyncClient` -- non-blocking client backed by :class:`httpx.AsyncClient`.

Example::

    from restwrap.client import SyncClient

    with SyncClient(api_key="secret", base_url="https://api.example.com") as client:
        users = client.request("/users")
"""

from restwrap.client.async_client import AsyncClient
from restwrap.client.sync_client import SyncClient

__all__ = ["SyncClient", "AsyncClient"]
