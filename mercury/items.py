"""Pydantic schemas for Mercury Parser responses.

The service answers every request with a JSON object that is either a parsed
article or an error envelope; nothing in the payload says which.
:func:`decode_response` tells them apart by shape, article first.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any
from urllib.parse import urlsplit

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from mercury.errors import ApiError, DeserializationError

_DEFAULT_PAGES = 1


def _is_absolute_url(value: str) -> bool:
    try:
        parts = urlsplit(value.strip())
    except ValueError:
        return False
    return bool(parts.scheme and parts.netloc)


# ---------------------------------------------------------------------------
# Article
# ---------------------------------------------------------------------------

class TextDirection(str, Enum):
    """Text direction of parsed body content."""

    LTR = "ltr"
    RTL = "rtl"

    def is_ltr(self) -> bool:
        return self is TextDirection.LTR

    def is_rtl(self) -> bool:
        return self is TextDirection.RTL


class Article(BaseModel):
    """Structured data, deserialized from an API response."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    author: str | None = None
    content: str = ""
    date_published: datetime | None = None
    dek: str | None = None
    direction: TextDirection = TextDirection.LTR
    excerpt: str = ""
    lead_image_url: str | None = None
    next_page_url: str | None = None
    rendered_pages: int = Field(default=_DEFAULT_PAGES, ge=1)
    title: str = ""
    total_pages: int = Field(default=_DEFAULT_PAGES, ge=1)
    url: str
    word_count: int = Field(default=0, ge=0)

    @field_validator("content", "excerpt", "title", mode="before")
    @classmethod
    def null_text(cls, v: Any) -> Any:
        return "" if v is None else v

    @field_validator("rendered_pages", "total_pages", mode="before")
    @classmethod
    def null_pages(cls, v: Any) -> Any:
        return _DEFAULT_PAGES if v is None else v

    @field_validator("word_count", mode="before")
    @classmethod
    def null_word_count(cls, v: Any) -> Any:
        return 0 if v is None else v

    @field_validator("direction", mode="before")
    @classmethod
    def null_direction(cls, v: Any) -> Any:
        return TextDirection.LTR if v is None else v

    @field_validator("lead_image_url", "next_page_url", mode="before")
    @classmethod
    def drop_invalid_url(cls, v: Any) -> Any:
        # Optional links are best effort: anything unusable becomes None.
        if isinstance(v, str) and _is_absolute_url(v):
            return v.strip()
        return None

    @field_validator("url")
    @classmethod
    def require_absolute_url(cls, v: str) -> str:
        if not _is_absolute_url(v):
            raise ValueError(f"not an absolute URL: {v!r}")
        return v.strip()


# ---------------------------------------------------------------------------
# Error envelope
# ---------------------------------------------------------------------------

class ParserError(BaseModel):
    """Error payload returned by the service instead of an article."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    message: str | None = None
    messages: str = ""

    @property
    def text(self) -> str:
        """``message`` when the server sent one, otherwise ``messages``."""
        if self.message is not None:
            return self.message
        return self.messages


def decode_response(body: bytes | str, *, url: str = "", status: int = 0) -> Article:
    """Decode a buffered response body into an :class:`Article`.

    The article shape is tried first; a body that fits both shapes is an
    article. Any other JSON object fits the error envelope, since both of its
    fields are optional.

    Raises:
        ApiError: The body is an error envelope.
        DeserializationError: The body is not JSON, or not a JSON object of
            either shape.
    """
    try:
        return Article.model_validate_json(body)
    except ValidationError:
        pass

    try:
        envelope = ParserError.model_validate_json(body)
    except ValidationError as exc:
        raise DeserializationError(
            f"could not decode response body: {exc}", url=url, status=status,
        ) from exc

    text = body.decode("utf-8", errors="replace") if isinstance(body, bytes) else body
    raise ApiError(envelope.text, url=url, status=status, body=text)
