"""mercury.client — asynchronous client for the Mercury Parser API.

Usage::

    import asyncio

    from mercury import Mercury, load_api_key

    async def main() -> None:
        async with Mercury(load_api_key()) as client:
            article = await client.parse("https://example.com")
            print(article.title)

    asyncio.run(main())

A :class:`Mercury` handle is bound to the event loop it is used on. Use
:meth:`Mercury.clone` to hand the same connection pool to other tasks, and
:class:`mercury.reader.Reader` to call the API from other threads.
"""

from __future__ import annotations

import logging
import ssl
from dataclasses import dataclass
from typing import TYPE_CHECKING

import httpx

from mercury.errors import ConfigurationError, TransportError, UrlFormatError
from mercury.items import decode_response
from mercury.settings import API_KEY_HEADER, ENDPOINT, URL_PARAM

if TYPE_CHECKING:
    from types import TracebackType

    from mercury.items import Article

logger = logging.getLogger(__name__)


def build_url(resource: str, endpoint: str = ENDPOINT) -> httpx.URL:
    """Compose the request URL for *resource*.

    *resource* is appended to the query string as-is; it is neither validated
    nor escaped beyond what URL parsing itself enforces. Parsing does
    percent-encode characters that are not allowed in a query (a space is
    sent as ``%20``), and an unescaped ``&`` starts a new parameter.

    Raises:
        UrlFormatError: The composed string is not an absolute URL.
    """
    raw = f"{endpoint}?{URL_PARAM}={resource}"
    try:
        url = httpx.URL(raw)
    except (httpx.InvalidURL, ValueError) as exc:
        raise UrlFormatError(f"Invalid request URL {raw!r}: {exc}", url=raw) from exc
    if not url.is_absolute_url:
        raise UrlFormatError(f"Request URL is not absolute: {raw!r}", url=raw)
    return url


@dataclass(eq=False)
class _Inner:
    http: httpx.AsyncClient
    key: str
    endpoint: str
    # Number of live Mercury handles sharing this pool
    refs: int = 1


class Mercury:
    """A client used to make requests to the Mercury Parser API.

    Args:
        key:       API key, sent verbatim in the ``X-Api-Key`` header.
        endpoint:  Parser endpoint (default: the public service).
        transport: Optional :class:`httpx.AsyncBaseTransport` to send requests
                   through instead of the default pooled HTTPS transport.

    Raises:
        ConfigurationError: The connection pool or TLS context could not be
            built.
    """

    def __init__(
        self,
        key: str,
        *,
        endpoint: str = ENDPOINT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        try:
            http = httpx.AsyncClient(transport=transport)
        except (ssl.SSLError, OSError, ValueError) as exc:
            raise ConfigurationError(f"Could not build HTTPS connection pool: {exc}") from exc
        self._inner = _Inner(http=http, key=key, endpoint=endpoint)
        self._closed = False

    @classmethod
    def _share(cls, inner: _Inner) -> Mercury:
        handle = cls.__new__(cls)
        inner.refs += 1
        handle._inner = inner
        handle._closed = False
        return handle

    def clone(self) -> Mercury:
        """Return another handle to the same connection pool and key."""
        return Mercury._share(self._live())

    __copy__ = clone

    @property
    def key(self) -> str:
        return self._inner.key

    @property
    def endpoint(self) -> str:
        return self._inner.endpoint

    @property
    def shares(self) -> int:
        """Number of open handles sharing this client's pool."""
        return self._inner.refs

    @property
    def closed(self) -> bool:
        return self._closed

    def _live(self) -> _Inner:
        if self._closed:
            raise ConfigurationError("Mercury client is closed")
        return self._inner

    async def aclose(self) -> None:
        """Release this handle; the pool closes with the last one."""
        if self._closed:
            return
        self._closed = True
        self._inner.refs -= 1
        if self._inner.refs == 0:
            logger.debug("Closing connection pool for %s", self._inner.endpoint)
            await self._inner.http.aclose()

    async def __aenter__(self) -> Mercury:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    def __repr__(self) -> str:
        state = "closed" if self._closed else f"shares={self._inner.refs}"
        return f"<Mercury endpoint={self._inner.endpoint!r} {state}>"

    async def parse(self, resource: str) -> Article:
        """Send one parse request for *resource* and return the article.

        Exactly one attempt is made. The whole response body is buffered
        before it is decoded.

        Raises:
            ConfigurationError: This handle has been closed.
            UrlFormatError: The composed URL is invalid (no request is sent).
            TransportError: The request failed at the network or TLS level.
            ApiError: The service answered with an error envelope.
            DeserializationError: The body could not be decoded.
        """
        inner = self._live()
        url = build_url(resource, inner.endpoint)

        logger.debug("GET %s", url)
        try:
            async with inner.http.stream(
                "GET", url, headers={API_KEY_HEADER: inner.key},
            ) as response:
                body = await response.aread()
        except httpx.RequestError as exc:
            raise TransportError(
                f"Request to {url} failed: {type(exc).__name__}: {exc}", url=str(url),
            ) from exc

        logger.debug("HTTP %d from %s (%d bytes)", response.status_code, url, len(body))
        return decode_response(body, url=str(url), status=response.status_code)
