"""mercury - Python client for the Mercury Parser API.

With one request, Mercury takes any web article and returns only the relevant
content (headline, author, body, lead image and more) free of clutter.

Async usage::

    import asyncio

    from mercury import Mercury, load_api_key

    async def main() -> None:
        async with Mercury(load_api_key()) as client:
            article = await client.parse("https://example.com")
            print(article.title)
            print(article.content)

    asyncio.run(main())

Blocking usage from any thread::

    from mercury import Reader

    with Reader() as reader:
        article = reader.parse("https://example.com")
"""

from mercury.client import Mercury, build_url
from mercury.errors import (
    ApiError,
    ConfigurationError,
    DeserializationError,
    MercuryError,
    TransportError,
    UrlFormatError,
)
from mercury.items import Article, ParserError, TextDirection, decode_response
from mercury.reader import Reader
from mercury.settings import load_api_key

__version__ = "0.1.0"
__all__ = [
    "ApiError",
    "Article",
    "ConfigurationError",
    "DeserializationError",
    "Mercury",
    "MercuryError",
    "ParserError",
    "Reader",
    "TextDirection",
    "TransportError",
    "UrlFormatError",
    "build_url",
    "decode_response",
    "load_api_key",
]
