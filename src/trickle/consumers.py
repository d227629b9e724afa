"""Terminal operations over a chunk sequence.

- `collect()`: join every chunk into one string
- `stream()`: wrap the sequence in a `ByteStream`, a pull-driven byte source
  for HTTP response bodies

Both depend only on the sequence shape (async or sync iterable of str), not
on how the chunks were produced.

ASGI Example:
    ```python
    from starlette.responses import StreamingResponse

    async def page(request):
        body = html(t"<h1>{title}</h1>{rows()}")
        return StreamingResponse(stream(body), media_type="text/html")
    ```
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterable, AsyncIterator, Iterable, Iterator
from enum import Enum

from trickle.utils.constants import DEFAULT_ENCODING

logger = logging.getLogger(__name__)

Chunks = AsyncIterable[str] | Iterable[str]


async def collect(chunks: Chunks) -> str:
    """Concatenate a chunk sequence, awaiting between chunks as needed.

    Async iteration is preferred when the sequence supports both protocols.

    Raises:
        ResolutionError: Propagated from the sequence.
    """
    parts: list[str] = []
    if hasattr(chunks, "__aiter__"):
        async for chunk in chunks:
            parts.append(chunk)
    else:
        for chunk in chunks:
            parts.append(chunk)
    return "".join(parts)


class StreamState(Enum):
    OPEN = "open"
    CLOSED = "closed"
    ERRORED = "errored"


class ByteStream:
    """Pull-driven byte source over a chunk sequence.

    Every ``pull()`` advances the sequence exactly once and returns that
    chunk encoded. Exhaustion closes the source. A failure mid-sequence
    errors the source: the pull that hit it raises, and so does every pull
    after it, so a truncated body never looks like a clean close.

    Also an async iterator of bytes, which is what ASGI response plumbing
    (Starlette/FastAPI ``StreamingResponse``) consumes.

    Example:
        >>> source = stream(html(("<p>", "</p>"), "é"))
        >>> await source.pull()
        b'<p>'
        >>> await source.pull()
        b'\\xc3\\xa9'
    """

    __slots__ = ("_async", "_encoding", "_error", "_iterator", "_state")

    def __init__(self, chunks: Chunks, *, encoding: str = DEFAULT_ENCODING):
        self._encoding = encoding
        self._async = hasattr(chunks, "__aiter__")
        self._iterator: AsyncIterator[str] | Iterator[str] = (
            aiter(chunks) if self._async else iter(chunks)  # type: ignore[arg-type]
        )
        self._state = StreamState.OPEN
        self._error: BaseException | None = None

    @property
    def encoding(self) -> str:
        return self._encoding

    @property
    def closed(self) -> bool:
        return self._state is StreamState.CLOSED

    @property
    def errored(self) -> bool:
        return self._state is StreamState.ERRORED

    async def pull(self) -> bytes | None:
        """Advance the sequence once.

        Returns:
            The next chunk encoded, or None once the source is closed.
        """
        if self._state is StreamState.ERRORED:
            assert self._error is not None
            raise self._error
        if self._state is StreamState.CLOSED:
            return None

        try:
            if self._async:
                chunk = await anext(self._iterator)  # type: ignore[arg-type]
            else:
                chunk = next(self._iterator)  # type: ignore[arg-type]
        except (StopAsyncIteration, StopIteration):
            self._state = StreamState.CLOSED
            logger.debug("Byte stream exhausted, closing")
            return None
        except Exception as e:
            self._state = StreamState.ERRORED
            self._error = e
            logger.debug(f"Byte stream aborted: {e!r}")
            raise
        return chunk.encode(self._encoding)

    def __aiter__(self) -> ByteStream:
        return self

    async def __anext__(self) -> bytes:
        data = await self.pull()
        if data is None:
            raise StopAsyncIteration
        return data

    async def aclose(self) -> None:
        """Stop pulling: close the source and the underlying sequence."""
        if self._state is not StreamState.OPEN:
            return
        self._state = StreamState.CLOSED
        if self._async:
            aclose = getattr(self._iterator, "aclose", None)
            if aclose is not None:
                await aclose()
        else:
            close = getattr(self._iterator, "close", None)
            if close is not None:
                close()

    def __repr__(self) -> str:
        return f"<ByteStream {self._encoding} {self._state.value}>"


def stream(chunks: Chunks, encoding: str = DEFAULT_ENCODING) -> ByteStream:
    """Adapt a chunk sequence into a pull-driven byte source."""
    return ByteStream(chunks, encoding=encoding)
