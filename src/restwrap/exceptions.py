"""Exception hierarchy for restwrap.

All exceptions inherit from :class:`RestwrapError`. Transport failures are
grouped under :class:`TransportError`, which carries the HTTP status code
(``None`` for network-level failures) and a :attr:`~TransportError.retryable`
flag so callers can decide whether a retry makes sense. The client itself
never retries.

Subclass hierarchy::

    RestwrapError
    +-- ValidationError
    +-- ConfigError
    +-- TransportError
        +-- AuthError          (401 / 403)
        +-- NotFoundError      (404)
        +-- ClientError        (other 4xx)
        +-- ServerError        (5xx)
        +-- ConnectionError_   (timeout, DNS, connection refused)
        +-- InvalidURLError    (malformed URL, missing scheme)
"""

from __future__ import annotations

from typing import Optional


class RestwrapError(Exception):
    """Base exception for all restwrap errors."""


class ValidationError(RestwrapError):
    """Raised when caller input is malformed (missing id, wrong type, bad options)."""


class ConfigError(RestwrapError):
    """Raised for configuration problems (invalid JSON, unset env vars, bad credential sources)."""


class TransportError(RestwrapError):
    """Raised when an HTTP exchange fails.

    Args:
        message: Human-readable error description.
        status_code: HTTP status of the failed response, or ``None`` when the
            request never produced a response.
        retryable: Explicit override; by default 5xx and response-less
            failures are retryable.
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        retryable: Optional[bool] = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self._retryable = retryable

    @property
    def retryable(self) -> bool:
        """Whether repeating the same request could plausibly succeed."""
        if self._retryable is not None:
            return self._retryable
        return self.status_code is None or self.status_code >= 500


class AuthError(TransportError):
    """Raised when the API rejects the credentials (HTTP 401 / 403)."""


class NotFoundError(TransportError):
    """Raised when the API returns HTTP 404 (resource not found)."""


class ClientError(TransportError):
    """Raised for any other HTTP 4xx response."""


class ServerError(TransportError):
    """Raised when the API returns an HTTP 5xx server error."""


class ConnectionError_(TransportError):
    """Raised on network-level failures (timeout, DNS resolution, connection refused).

    Named with a trailing underscore to avoid shadowing the built-in
    ``ConnectionError``.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message, status_code=None, retryable=True)


class InvalidURLError(TransportError):
    """Raised when the request URL is malformed or uses an unsupported scheme.

    Never retryable: the same URL fails the same way every time.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message, status_code=None, retryable=False)
