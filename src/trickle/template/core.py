"""Trickle Template: one template invocation and its chunk sequence.

A Template pairs N static fragments with N-1 dynamic values and produces
the output lazily, in source order:

    ```
    strings[0], resolve(values[0]), strings[1], ..., resolve(values[-1]), strings[-1]
    ```

Each value goes through the resolver: scalars and strings become one escaped
chunk, safe values one verbatim chunk, producers are flattened depth-first.

Rendering API:
    - ``async for chunk in t`` / ``render_stream_async()``: any template
    - ``for chunk in t`` / ``render_stream()``: templates without awaitables
      or async iterables
    - ``render()`` / ``render_async()``: joined string
    - ``stream()``: UTF-8 byte source for HTTP response bodies

Single Use:
An invocation is consumed by exactly one of the above, or by being embedded
as a value in another template. A second consumption raises
``ALREADY_CONSUMED``; build a new invocation to render again.

Nesting:
An embedded Template is a safe producer whose items are its fragments (as
`SafeString`) and its classified values, so its own strings are escaped
exactly once and never again by the outer template.
"""

from __future__ import annotations

import inspect
from collections.abc import AsyncIterator, Iterable, Iterator
from typing import TYPE_CHECKING, Any

from trickle.environment.core import DEFAULT_ENVIRONMENT
from trickle.environment.exceptions import (
    ErrorCode,
    MalformedTemplateError,
    TemplateRuntimeError,
)
from trickle.resolver import resolve, resolve_sync
from trickle.values import Producer, SafeString, Value, classify

if TYPE_CHECKING:
    from trickle.consumers import ByteStream
    from trickle.environment.core import Environment


def _note_position(error: TemplateRuntimeError, position: int) -> None:
    if error.position is None:
        error.position = position


def _close_unreached(values: tuple[Any, ...]) -> None:
    """Close coroutine values the sequence stopped before reaching."""
    for value in values:
        if inspect.iscoroutine(value):
            value.close()


class Template:
    """A single-use template invocation.

    Example:
        >>> t = Template(["<p>", "</p>"], ["<b>hi</b>"])
        >>> t.render()
        '<p>&lt;b&gt;hi&lt;/b&gt;</p>'

    Raises:
        MalformedTemplateError: ``len(strings) != len(values) + 1`` or a
            fragment is not a str.
    """

    __slots__ = ("_consumed", "_env", "_strings", "_values")

    def __init__(
        self,
        strings: Iterable[str],
        values: Iterable[Any] = (),
        *,
        env: Environment | None = None,
    ):
        strings = tuple(strings)
        values = tuple(values)
        if len(strings) != len(values) + 1:
            raise MalformedTemplateError(
                f"Template needs len(strings) == len(values) + 1, "
                f"got {len(strings)} strings and {len(values)} values",
                string_count=len(strings),
                value_count=len(values),
            )
        for fragment in strings:
            if not isinstance(fragment, str):
                raise MalformedTemplateError(
                    f"Template fragments must be str, got {type(fragment).__name__}",
                    string_count=len(strings),
                    value_count=len(values),
                )
        self._strings = strings
        self._values = values
        self._env = env or DEFAULT_ENVIRONMENT
        self._consumed = False

    @property
    def strings(self) -> tuple[str, ...]:
        return self._strings

    @property
    def values(self) -> tuple[Any, ...]:
        return self._values

    @property
    def env(self) -> Environment:
        return self._env

    @property
    def consumed(self) -> bool:
        """True once the chunk sequence has been handed out."""
        return self._consumed

    def _claim(self) -> None:
        if self._consumed:
            raise TemplateRuntimeError(
                "Template invocation was already consumed",
                code=ErrorCode.ALREADY_CONSUMED,
                values={"template": self},
                suggestion="Build a new invocation with html(...) for every render",
            )
        self._consumed = True

    # -- Sequencer -----------------------------------------------------------

    def _sequence(self) -> Iterator[str]:
        escape = self._env.escape
        max_depth = self._env.max_depth
        reached = 0
        try:
            for position, (fragment, value) in enumerate(zip(self._strings, self._values)):
                yield fragment
                reached = position + 1
                try:
                    is_producer, payload = resolve_sync(value, escape=escape, max_depth=max_depth)
                    if is_producer:
                        yield from payload
                    else:
                        yield payload
                except TemplateRuntimeError as e:
                    _note_position(e, position)
                    raise
            yield self._strings[-1]
        finally:
            _close_unreached(self._values[reached:])

    async def _sequence_async(self) -> AsyncIterator[str]:
        escape = self._env.escape
        max_depth = self._env.max_depth
        reached = 0
        try:
            for position, (fragment, value) in enumerate(zip(self._strings, self._values)):
                yield fragment
                reached = position + 1
                try:
                    is_producer, payload = await resolve(value, escape=escape, max_depth=max_depth)
                    if not is_producer:
                        yield payload
                        continue
                    try:
                        async for chunk in payload:
                            yield chunk
                    finally:
                        await payload.aclose()
                except TemplateRuntimeError as e:
                    _note_position(e, position)
                    raise
            yield self._strings[-1]
        finally:
            _close_unreached(self._values[reached:])

    def _segments(self) -> Iterator[Value]:
        reached = 0
        try:
            for position, (fragment, value) in enumerate(zip(self._strings, self._values)):
                yield SafeString(fragment)
                reached = position + 1
                yield classify(value)
            yield SafeString(self._strings[-1])
        finally:
            _close_unreached(self._values[reached:])

    def as_producer(self) -> Producer:
        """Present this invocation as a value embedded in another template."""
        self._claim()
        return Producer(self._segments(), already_safe=True)

    # -- Rendering API -------------------------------------------------------

    def __iter__(self) -> Iterator[str]:
        self._claim()
        return self._sequence()

    def __aiter__(self) -> AsyncIterator[str]:
        self._claim()
        return self._sequence_async()

    def render_stream(self) -> Iterator[str]:
        """Yield chunks synchronously.

        Raises ``ASYNC_REQUIRED`` on reaching an awaitable or async iterable.
        """
        return iter(self)

    def render_stream_async(self) -> AsyncIterator[str]:
        """Yield chunks as an async iterator, awaiting values as needed.

        Example:
            >>> async for chunk in page.render_stream_async():
            ...     await send(chunk)
        """
        return aiter(self)

    def render(self) -> str:
        """Render the whole template synchronously."""
        return "".join(self)

    async def render_async(self) -> str:
        """Render the whole template, awaiting deferred values."""
        from trickle.consumers import collect

        return await collect(self)

    def stream(self) -> ByteStream:
        """Pull-driven byte source for an HTTP response body."""
        return self._env.stream(self)

    def __repr__(self) -> str:
        state = "consumed" if self._consumed else "pending"
        return f"<Template {len(self._values)} values, {state}>"
