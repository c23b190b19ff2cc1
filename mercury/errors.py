"""Exception types raised by the mercury client.

Every failure reaches the caller of :meth:`mercury.Mercury.parse` (or of the
client constructor) as a subclass of :class:`MercuryError`; nothing is logged,
retried or swallowed on the way.
"""

from __future__ import annotations


class MercuryError(RuntimeError):
    """Base class for all client failures.

    Attributes:
        url -- the composed request URL (or the raw resource when the URL
               could not be composed); empty when no request was involved
    """

    def __init__(self, message: str, url: str = "") -> None:
        super().__init__(message)
        self.url = url


class ConfigurationError(MercuryError):
    """The client could not be built or used: TLS/pool setup, missing API key,
    or a handle that has already been closed."""


class UrlFormatError(MercuryError, ValueError):
    """The composed request URL is not a valid URL. Raised before any I/O."""


class TransportError(MercuryError):
    """Connection, TLS handshake, or read/write failure during the exchange.

    The underlying :mod:`httpx` exception is kept as ``__cause__``.
    """


class ApiError(MercuryError):
    """The service answered with an error envelope.

    ``str(exc)`` is exactly the server-supplied text, which may be empty.

    Attributes:
        message -- the server-supplied text
        status  -- HTTP status code of the response (0 if unknown)
        body    -- the raw response body, decoded as UTF-8
    """

    def __init__(
        self,
        message: str,
        url: str = "",
        status: int = 0,
        body: str | None = None,
    ) -> None:
        super().__init__(message, url=url)
        self.message = message
        self.status = status
        self.body = body


class DeserializationError(MercuryError):
    """The response body matched neither the article nor the error shape."""

    def __init__(self, message: str, url: str = "", status: int = 0) -> None:
        super().__init__(message, url=url)
        self.status = status
