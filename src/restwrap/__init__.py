"""restwrap -- a caching CRUD wrapper for REST APIs.

Every call funnels through one ``request`` method on the client, which adds
the API key header, serves GETs from an in-memory TTL cache, and clears the
cache after any successful POST, PUT or DELETE.

Typical use::

    from restwrap import APIWrapper

    api = APIWrapper(api_key="secret", base_url="https://api.example.com/v1")
    api.get_data("123")          # network
    api.get_data("123")          # cache hit
    api.update_item("123", {"name": "B"})   # network, cache cleared

Modules:
    client: Sync and async clients applying the cache policy.
    cache: In-memory TTL response cache.
    transport: httpx-backed transports and error mapping.
    wrapper: CRUD facade with argument validation.
    models: Pydantic models for configuration and request options.
    config: Environment and project-file configuration resolution.
    exceptions: Exception hierarchy.
    output: Rich-backed diagnostics and response rendering.
"""

from restwrap.client import AsyncClient, SyncClient
from restwrap.exceptions import RestwrapError, TransportError, ValidationError
from restwrap.models import ClientConfig, RequestOptions
from restwrap.wrapper import APIWrapper

__version__ = "0.1.0"

__all__ = [
    "APIWrapper",
    "AsyncClient",
    "ClientConfig",
    "RequestOptions",
    "RestwrapError",
    "SyncClient",
    "TransportError",
    "ValidationError",
]
