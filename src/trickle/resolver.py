"""Trickle resolver: turns one dynamic value into output chunks.

`resolve()` classifies a value, awaits it while it is deferred, and returns
either a single escaped (or safe) chunk or a `ChunkStream` that flattens a
producer depth-first.

Work Stack:
`ChunkStream` never delegates with ``yield from``. It keeps an explicit
stack of open producer frames plus at most one pending value, and exposes
a single step operation with three outcomes:

    ```
    step() ─┬─> str        chunk ready, hand it to the consumer
            ├─> _Suspend   awaitable needed (deferred value, async producer)
            └─> _DONE      stack empty, sequence exhausted
    ```

The async driver (``__anext__``) awaits suspensions and feeds the result
back; the sync driver (``__next__``) refuses them with ``ASYNC_REQUIRED``.
Suspension therefore only ever happens while settling a deferred value or
pulling the next element of an async producer.

Failure:
Any error ends the stream and later pulls report exhaustion. Open sync
frames are closed at once; open async frames are kept until `aclose()`.
Producer and deferred failures surface as `ResolutionError` with the
original exception chained.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import Enum
from typing import Any

from trickle.environment.exceptions import (
    ErrorCode,
    NestingDepthError,
    ResolutionError,
    TemplateRuntimeError,
)
from trickle.utils.constants import DEFAULT_MAX_DEPTH
from trickle.utils.html import html_escape
from trickle.values import (
    Deferred,
    PlainString,
    Producer,
    SafeString,
    Scalar,
    Value,
    classify,
)

logger = logging.getLogger(__name__)

Escape = Callable[[str], str]

_DONE = object()


def _async_required(value: Any) -> TemplateRuntimeError:
    return TemplateRuntimeError(
        "Value requires asynchronous rendering",
        code=ErrorCode.ASYNC_REQUIRED,
        values={"value": value},
        suggestion="Use 'async for', render_async() or collect() for templates "
        "with awaitables or async iterables",
    )


def _discard(awaitable: Any) -> None:
    """Close an awaitable that will never be awaited (coroutines, anext)."""
    close = getattr(awaitable, "close", None)
    if callable(close):
        close()


def emit(value: Scalar | PlainString | SafeString, escape: Escape = html_escape) -> str:
    """Render a non-producer value as its single output chunk."""
    if isinstance(value, SafeString):
        return value.text
    return escape(value.text)


class _Frame:
    """One open producer on the work stack."""

    __slots__ = ("already_safe", "is_async", "iterator", "source")

    def __init__(self, producer: Producer, prefer_async: bool):
        items = producer.items
        self.source = items
        self.already_safe = producer.already_safe
        # Objects with both protocols follow the driver
        self.is_async = producer.is_async and (prefer_async or not hasattr(items, "__iter__"))
        if self.is_async:
            self.iterator = aiter(producer.items)
        else:
            self.iterator = iter(producer.items)

    def adopt(self, item: Any) -> Value:
        # Strings a safe producer yields itself are finalized HTML
        if self.already_safe and isinstance(item, str) and not isinstance(item, Enum):
            return SafeString(str(item))
        return classify(item)


class _Suspend:
    __slots__ = ("awaitable", "frame")

    def __init__(self, awaitable: Any, frame: _Frame | None = None):
        self.awaitable = awaitable
        # None when settling a deferred value, else the async producer pulled
        self.frame = frame


class ChunkStream:
    """Single-pass, depth-first chunk sequence for one value.

    Iterable both synchronously and asynchronously. Synchronous iteration
    raises ``ASYNC_REQUIRED`` when it reaches a deferred value or an async
    producer.

    Example:
        >>> stream = ChunkStream(classify(["a", ["<b>"], 1]))
        >>> list(stream)
        ['a', '&lt;b&gt;', '1']
    """

    __slots__ = ("_done", "_escape", "_max_depth", "_open_async", "_pending", "_stack")

    def __init__(
        self,
        value: Value,
        *,
        escape: Escape = html_escape,
        max_depth: int = DEFAULT_MAX_DEPTH,
    ):
        self._escape = escape
        self._max_depth = max_depth
        self._pending: Value | None = value
        self._stack: list[_Frame] = []
        # Async iterators still open after a failure, closed by aclose()
        self._open_async: list[Any] = []
        self._done = False

    @property
    def depth(self) -> int:
        """Number of producers currently open."""
        return len(self._stack)

    def _push(self, producer: Producer, prefer_async: bool) -> None:
        if len(self._stack) >= self._max_depth:
            raise NestingDepthError(self._max_depth, producer.items)
        try:
            frame = _Frame(producer, prefer_async)
        except Exception as exc:
            raise ResolutionError.from_producer(producer.items, exc) from exc
        self._stack.append(frame)

    def _step(self, prefer_async: bool) -> str | _Suspend | object:
        while True:
            value = self._pending
            if value is not None:
                self._pending = None
                if isinstance(value, Deferred):
                    return _Suspend(value.awaitable)
                if isinstance(value, Producer):
                    self._push(value, prefer_async)
                    continue
                return emit(value, self._escape)

            if not self._stack:
                return _DONE

            frame = self._stack[-1]
            if frame.is_async:
                return _Suspend(anext(frame.iterator), frame)
            try:
                item = next(frame.iterator)
            except StopIteration:
                self._stack.pop()
                continue
            except Exception as exc:
                raise ResolutionError.from_producer(frame.source, exc) from exc
            self._pending = frame.adopt(item)

    async def _settle(self, step: _Suspend) -> None:
        frame = step.frame
        try:
            result = await step.awaitable
        except StopAsyncIteration as exc:
            if frame is None:
                raise ResolutionError.from_deferred(step.awaitable, exc) from exc
            self._stack.pop()
            return
        except Exception as exc:
            if frame is None:
                raise ResolutionError.from_deferred(step.awaitable, exc) from exc
            raise ResolutionError.from_producer(frame.source, exc) from exc

        # Re-classify: a settled value can be anything, including another awaitable
        self._pending = classify(result) if frame is None else frame.adopt(result)

    def _release(self) -> list[Any]:
        """End the stream, closing sync iterators; return async ones still open."""
        self._done = True
        if self._pending is not None:
            if isinstance(self._pending, Deferred):
                _discard(self._pending.awaitable)
            self._pending = None
        frames, self._stack = self._stack, []
        open_async = []
        for frame in reversed(frames):
            if frame.is_async:
                open_async.append(frame.iterator)
            else:
                close = getattr(frame.iterator, "close", None)
                if callable(close):
                    close()
        return open_async

    def _fail(self, error: BaseException) -> None:
        logger.debug(f"Chunk stream failed at depth {len(self._stack)}: {error!r}")
        self._open_async.extend(self._release())

    def __iter__(self) -> ChunkStream:
        return self

    def __next__(self) -> str:
        if self._done:
            raise StopIteration
        try:
            step = self._step(prefer_async=False)
        except BaseException as exc:
            self._fail(exc)
            raise
        if step is _DONE:
            self._done = True
            raise StopIteration
        if isinstance(step, _Suspend):
            _discard(step.awaitable)
            source = step.frame.source if step.frame is not None else step.awaitable
            error = _async_required(source)
            self._fail(error)
            raise error
        return step  # type: ignore[return-value]

    def __aiter__(self) -> ChunkStream:
        return self

    async def __anext__(self) -> str:
        while not self._done:
            try:
                step = self._step(prefer_async=True)
                if isinstance(step, _Suspend):
                    await self._settle(step)
                    continue
            except BaseException as exc:
                self._fail(exc)
                raise
            if step is _DONE:
                self._done = True
                break
            return step  # type: ignore[return-value]
        raise StopAsyncIteration

    def close(self) -> None:
        """Stop producing chunks and close open sync producers."""
        self._release()

    async def aclose(self) -> None:
        """Stop producing chunks and close every open producer."""
        iterators = self._open_async + self._release()
        self._open_async = []
        for iterator in iterators:
            aclose = getattr(iterator, "aclose", None)
            if aclose is not None:
                await aclose()


async def resolve(
    value: Any,
    *,
    escape: Escape = html_escape,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> tuple[bool, str | ChunkStream]:
    """Resolve one dynamic value.

    Returns:
        ``(False, chunk)`` for scalars, strings and safe values, or
        ``(True, stream)`` for producers, where ``stream`` yields the
        flattened chunks.

    Raises:
        ResolutionError: A deferred value raised while being awaited.
    """
    resolved = classify(value)
    while isinstance(resolved, Deferred):
        try:
            result = await resolved.awaitable
        except Exception as exc:
            raise ResolutionError.from_deferred(resolved.awaitable, exc) from exc
        resolved = classify(result)

    if isinstance(resolved, Producer):
        return True, ChunkStream(resolved, escape=escape, max_depth=max_depth)
    return False, emit(resolved, escape)


def resolve_sync(
    value: Any,
    *,
    escape: Escape = html_escape,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> tuple[bool, str | ChunkStream]:
    """Synchronous `resolve()`; deferred values raise ``ASYNC_REQUIRED``."""
    resolved = classify(value)
    if isinstance(resolved, Deferred):
        _discard(resolved.awaitable)
        raise _async_required(resolved.awaitable)
    if isinstance(resolved, Producer):
        return True, ChunkStream(resolved, escape=escape, max_depth=max_depth)
    return False, emit(resolved, escape)
