"""Shared pytest fixtures."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import httpx
import pytest

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def _read_fixture(name: str) -> bytes:
    return (FIXTURES_DIR / name).read_bytes()


@pytest.fixture
def article_json() -> bytes:
    return _read_fixture("article.json")


@pytest.fixture
def minimal_article_json() -> bytes:
    return _read_fixture("minimal_article.json")


@pytest.fixture
def error_json() -> bytes:
    return _read_fixture("error.json")


@pytest.fixture
def seen() -> list[httpx.Request]:
    """Requests received by transports built with ``make_transport``."""
    return []


@pytest.fixture
def make_transport(seen):
    """Build an :class:`httpx.MockTransport` answering every request alike.

    *body* may be raw bytes or any JSON-serialisable value. With *raises*,
    the transport raises that :class:`httpx.RequestError` subclass instead.
    """

    def _make(
        body: bytes | Any = b"{}",
        status: int = 200,
        raises: type[httpx.RequestError] | None = None,
    ) -> httpx.MockTransport:
        content = body if isinstance(body, bytes) else json.dumps(body).encode()

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            if raises is not None:
                raise raises("simulated failure", request=request)
            return httpx.Response(
                status, content=content, headers={"Content-Type": "application/json"},
            )

        return httpx.MockTransport(handler)

    return _make
