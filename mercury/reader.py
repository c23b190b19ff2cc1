"""Blocking, thread-safe access to the Mercury Parser API.

:class:`~mercury.client.Mercury` is bound to one event loop. :class:`Reader`
runs that loop on a dedicated worker thread and feeds it through a queue, so
synchronous code (a web framework's request handlers, a script) on any thread
can parse articles::

    from mercury.reader import Reader

    with Reader() as reader:
        article = reader.parse("https://example.com/blog/post")
        print(article.title)
"""

from __future__ import annotations

import asyncio
import logging
import threading
from concurrent.futures import Future
from typing import TYPE_CHECKING

from mercury.client import Mercury
from mercury.settings import load_api_key, load_endpoint

if TYPE_CHECKING:
    import os
    from types import TracebackType

    import httpx

    from mercury.items import Article

logger = logging.getLogger(__name__)

# (article url, completion signal); None stops the worker
_Message = tuple[str, "Future[Article]"] | None


class Reader:
    """Owns a worker thread running a :class:`Mercury` client.

    Args:
        key:       API key. Loaded with :func:`mercury.settings.load_api_key`
                   when omitted.
        endpoint:  Parser endpoint. Defaults to ``MERCURY_ENDPOINT`` or the
                   public service.
        transport: Optional :mod:`httpx` transport forwarded to the client.
        env_file:  Optional ``.env`` file used when loading the key.

    Construction blocks until the worker's client is ready; if the client
    cannot be built, the error is raised here.
    """

    def __init__(
        self,
        key: str | None = None,
        *,
        endpoint: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        env_file: str | os.PathLike[str] | None = None,
    ) -> None:
        self._loop: asyncio.AbstractEventLoop | None = None
        self._queue: asyncio.Queue[_Message] | None = None
        self._lock = threading.Lock()
        self._closed = False

        ready: Future[None] = Future()
        self._thread = threading.Thread(
            target=asyncio.run,
            args=(self._serve(ready, key, endpoint, transport, env_file),),
            name="mercury-reader",
            daemon=True,
        )
        self._thread.start()
        try:
            ready.result()
        except BaseException:
            self._closed = True
            self._thread.join()
            raise

    async def _serve(
        self,
        ready: Future[None],
        key: str | None,
        endpoint: str | None,
        transport: httpx.AsyncBaseTransport | None,
        env_file: str | os.PathLike[str] | None,
    ) -> None:
        try:
            client = Mercury(
                key if key is not None else load_api_key(env_file),
                endpoint=endpoint or load_endpoint(),
                transport=transport,
            )
        except Exception as exc:
            ready.set_exception(exc)
            return

        self._loop = asyncio.get_running_loop()
        self._queue = asyncio.Queue()
        ready.set_result(None)
        logger.debug("Reader worker started for %s", client.endpoint)

        pending: set[asyncio.Task[None]] = set()
        async with client:
            while True:
                message = await self._queue.get()
                if message is None:
                    break
                url, future = message
                task = asyncio.create_task(self._handle(client, url, future))
                pending.add(task)
                task.add_done_callback(pending.discard)
            if pending:
                await asyncio.gather(*pending)
        logger.debug("Reader worker stopped")

    @staticmethod
    async def _handle(client: Mercury, url: str, future: Future[Article]) -> None:
        if not future.set_running_or_notify_cancel():
            return
        try:
            article = await client.parse(url)
        except Exception as exc:
            future.set_exception(exc)
        else:
            future.set_result(article)

    @property
    def closed(self) -> bool:
        return self._closed

    def submit(self, url: str) -> Future[Article]:
        """Queue *url* for parsing and return a future for the article."""
        future: Future[Article] = Future()
        with self._lock:
            if self._closed:
                raise RuntimeError("reader is closed")
            self._loop.call_soon_threadsafe(self._queue.put_nowait, (url, future))
        return future

    def parse(self, url: str, timeout: float | None = None) -> Article:
        """Parse *url*, blocking the calling thread until the article arrives.

        Raises whatever :meth:`mercury.client.Mercury.parse` raises, and
        :class:`TimeoutError` if *timeout* seconds pass first.
        """
        return self.submit(url).result(timeout)

    def close(self) -> None:
        """Finish queued requests, close the client and join the worker."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            self._loop.call_soon_threadsafe(self._queue.put_nowait, None)
        self._thread.join()

    def __enter__(self) -> Reader:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
