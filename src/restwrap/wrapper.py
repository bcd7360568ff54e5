"""CRUD-style facade over :class:`~restwrap.client.SyncClient`.

:class:`APIWrapper` validates arguments, assembles endpoints and query
strings, and forwards everything to the client's single ``request`` entry
point. Bad input raises :class:`~restwrap.exceptions.ValidationError` before
any network or cache activity.

Two families of methods are provided: fixed-route helpers for the ``/data``,
``/items`` and ``/search`` endpoints, and generic ``*_resource`` helpers that
take the collection path as an argument.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Optional

import httpx

from restwrap.client import SyncClient
from restwrap.exceptions import ValidationError
from restwrap.models import ClientConfig


def _require_id(id: Any) -> str:
    if not isinstance(id, str) or not id:
        raise ValidationError("Valid ID is required")
    return id


def _require_mapping(value: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ValidationError(f"Valid {what} object is required")
    return value


def _require_query(query: Any) -> str:
    if not isinstance(query, str) or not query:
        raise ValidationError("Valid search query is required")
    return query


def _require_path(path: Any) -> str:
    if not isinstance(path, str) or not path.startswith("/"):
        raise ValidationError("Resource path must be a string starting with '/'")
    # The root collection "/" becomes "" so that f"{path}/{id}" yields "/id".
    return path.rstrip("/")


def _collection(path: Any) -> str:
    return _require_path(path) or "/"


def _with_query(path: str, params: Optional[Mapping[str, Any]]) -> str:
    """Append ``params`` to ``path`` as a query string, keeping insertion order."""
    if not params:
        return path
    query = str(httpx.QueryParams(dict(params)))
    return f"{path}?{query}" if query else path


class APIWrapper:
    """CRUD operations over a REST backend.

    Args:
        config: Client configuration, or ``None`` to build one from *kwargs*.
        client: Pre-built client to wrap instead of constructing one. The
            wrapper never closes a client it did not build.
        **kwargs: Forwarded to :class:`~restwrap.client.SyncClient`
            (``api_key``, ``base_url``, ``cache_ttl``, ``http_transport``...).

    Example::

        api = APIWrapper(api_key="secret", base_url="https://api.example.com/v1")
        item = api.create_item({"name": "Widget", "description": "Blue"})
        api.update_item(item["id"], {"name": "Gadget"})
    """

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        client: Optional[SyncClient] = None,
        **kwargs: Any,
    ) -> None:
        # A caller-supplied client stays open on exit; its lifetime is theirs.
        self._owns_client = client is None
        self.client = client if client is not None else SyncClient(config, **kwargs)

    def __enter__(self) -> APIWrapper:
        return self

    def __exit__(self, *args: object) -> None:
        if self._owns_client:
            self.client.close()

    # ------------------------------------------------------------------ #
    # Data retrieval
    # ------------------------------------------------------------------ #

    def get_data(self, id: str, **options: Any) -> Any:
        return self.client.request(f"/data/{_require_id(id)}", **options)

    def get_all_data(self, params: Optional[Mapping[str, Any]] = None) -> Any:
        return self.client.request(_with_query("/data", params))

    # ------------------------------------------------------------------ #
    # Items
    # ------------------------------------------------------------------ #

    def create_item(self, item: Mapping[str, Any]) -> Any:
        """Create an item. ``name`` and ``description`` are required."""
        item = _require_mapping(item, "item data")
        if not item.get("name") or not item.get("description"):
            raise ValidationError("Item must have name and description")
        return self.client.request("/items", method="POST", body=dict(item))

    def update_item(self, id: str, updates: Mapping[str, Any]) -> Any:
        path = f"/items/{_require_id(id)}"
        updates = _require_mapping(updates, "updates")
        return self.client.request(path, method="PUT", body=dict(updates))

    def delete_item(self, id: str) -> Any:
        return self.client.request(f"/items/{_require_id(id)}", method="DELETE")

    def search_items(self, query: str, filters: Optional[Mapping[str, Any]] = None) -> Any:
        params = {"q": _require_query(query), **(filters or {})}
        return self.client.request(_with_query("/search", params))

    # ------------------------------------------------------------------ #
    # Generic resources
    # ------------------------------------------------------------------ #

    def get_resource(self, id: str, path: str) -> Any:
        return self.client.request(f"{_require_path(path)}/{_require_id(id)}")

    def get_all_resources(self, path: str, params: Optional[Mapping[str, Any]] = None) -> Any:
        return self.client.request(_with_query(_collection(path), params))

    def create_resource(self, data: Mapping[str, Any], path: str) -> Any:
        data = _require_mapping(data, "resource data")
        return self.client.request(_collection(path), method="POST", body=dict(data))

    def update_resource(self, id: str, updates: Mapping[str, Any], path: str) -> Any:
        endpoint = f"{_require_path(path)}/{_require_id(id)}"
        updates = _require_mapping(updates, "updates")
        return self.client.request(endpoint, method="PUT", body=dict(updates))

    def delete_resource(self, id: str, path: str) -> Any:
        return self.client.request(
            f"{_require_path(path)}/{_require_id(id)}", method="DELETE"
        )

    def search_resources(
        self,
        query: str,
        path: str,
        filters: Optional[Mapping[str, Any]] = None,
    ) -> Any:
        params = {"q": _require_query(query), **(filters or {})}
        return self.client.request(_with_query(_collection(path), params))

    # ------------------------------------------------------------------ #
    # Utilities
    # ------------------------------------------------------------------ #

    def clear_cache(self) -> None:
        self.client.clear_cache()

    def set_api_key(self, api_key: str) -> None:
        self.client.api_key = api_key

    def set_base_url(self, base_url: str) -> None:
        self.client.base_url = base_url
