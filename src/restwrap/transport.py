"""HTTP transport adapters backed by :mod:`httpx`.

A transport performs exactly one network exchange per :meth:`send` call and
returns the parsed payload. It knows nothing about caching or API keys: the
client composes the full URL and headers before calling it.

Non-success statuses and network failures are mapped to the
:class:`~restwrap.exceptions.TransportError` family:

==============  ===========================================
401, 403        :class:`~restwrap.exceptions.AuthError`
404             :class:`~restwrap.exceptions.NotFoundError`
other 4xx       :class:`~restwrap.exceptions.ClientError`
5xx             :class:`~restwrap.exceptions.ServerError`
network error   :class:`~restwrap.exceptions.ConnectionError_`
bad URL         :class:`~restwrap.exceptions.InvalidURLError`
==============  ===========================================

Connection and timeout failures are retryable. A malformed URL or any other
request-level failure (redirect loop, undecodable body) is not.

Both adapters accept an optional ``transport`` argument that is handed to
the underlying httpx client, which is how the test suite plugs in
:class:`httpx.MockTransport`.
"""

from __future__ import annotations

from typing import Any, Optional

import httpx

from restwrap.exceptions import (
    AuthError,
    ClientError,
    ConnectionError_,
    InvalidURLError,
    NotFoundError,
    ServerError,
    TransportError,
)


def parse_payload(response: httpx.Response) -> Any:
    """Decode a successful response body.

    Returns ``None`` for empty bodies, the parsed JSON document when the body
    is valid JSON, and the text body otherwise.
    """
    if response.status_code == 204 or not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


def map_response_error(response: httpx.Response) -> TransportError:
    """Build the typed exception for an error response (status >= 400)."""
    status = response.status_code

    try:
        detail = response.json()
        if isinstance(detail, dict):
            msg = detail.get("message") or detail.get("error") or detail.get("detail") or ""
        else:
            msg = str(detail)
    except ValueError:
        msg = response.text[:200] if response.text else ""

    prefix = f"HTTP {status}"
    full_msg = f"{prefix}: {msg}" if msg else prefix

    if status in (401, 403):
        return AuthError(full_msg, status_code=status)
    if status == 404:
        return NotFoundError(full_msg, status_code=status)
    if status >= 500:
        return ServerError(full_msg, status_code=status)
    return ClientError(full_msg, status_code=status)


def map_request_error(method: str, url: str, exc: Exception) -> TransportError:
    """Build the typed exception for a request that produced no response."""
    message = f"{method} {url} failed: {exc}"
    if isinstance(exc, (httpx.UnsupportedProtocol, httpx.InvalidURL)):
        return InvalidURLError(message)
    if isinstance(exc, httpx.TransportError):
        return ConnectionError_(message)
    return TransportError(message, retryable=False)


def _request_kwargs(
    method: str, url: str, headers: dict[str, str], body: Any
) -> dict[str, Any]:
    kwargs: dict[str, Any] = {"method": method, "url": url, "headers": headers}
    if body is not None:
        kwargs["json"] = body
    return kwargs


class HttpxTransport:
    """Blocking transport backed by :class:`httpx.Client`.

    Args:
        timeout: Request timeout in seconds.
        verify_ssl: Verify SSL certificates.
        transport: Optional httpx transport (e.g. :class:`httpx.MockTransport`).
    """

    def __init__(
        self,
        timeout: float = 30,
        verify_ssl: bool = True,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._client = httpx.Client(
            timeout=timeout,
            verify=verify_ssl,
            follow_redirects=True,
            transport=transport,
        )

    def send(
        self,
        method: str,
        url: str,
        headers: dict[str, str],
        body: Any = None,
    ) -> Any:
        """Perform one HTTP exchange and return the parsed payload.

        Raises:
            TransportError: On a non-success status or a network failure.
        """
        try:
            response = self._client.request(**_request_kwargs(method, url, headers, body))
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise map_request_error(method, url, exc) from exc

        if response.status_code >= 400:
            raise map_response_error(response)
        return parse_payload(response)

    def close(self) -> None:
        self._client.close()


class AsyncHttpxTransport:
    """Non-blocking transport backed by :class:`httpx.AsyncClient`.

    Mirrors :class:`HttpxTransport`; :meth:`send` and :meth:`close` are
    coroutines.
    """

    def __init__(
        self,
        timeout: float = 30,
        verify_ssl: bool = True,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._client = httpx.AsyncClient(
            timeout=timeout,
            verify=verify_ssl,
            follow_redirects=True,
            transport=transport,
        )

    async def send(
        self,
        method: str,
        url: str,
        headers: dict[str, str],
        body: Any = None,
    ) -> Any:
        try:
            response = await self._client.request(
                **_request_kwargs(method, url, headers, body)
            )
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise map_request_error(method, url, exc) from exc

        if response.status_code >= 400:
            raise map_response_error(response)
        return parse_payload(response)

    async def close(self) -> None:
        await self._client.aclose()
