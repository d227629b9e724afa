"""Tests for collect() and the pull-driven ByteStream."""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator

import pytest

from trickle import ByteStream, ResolutionError, collect, html, mark_safe, stream


async def async_items(items: list) -> AsyncIterator:
    for item in items:
        yield item


async def settle(value):
    await asyncio.sleep(0)
    return value


async def explode():
    raise TimeoutError("slow backend")


# ---------------------------------------------------------------------------
# collect()
# ---------------------------------------------------------------------------


class TestCollect:
    @pytest.mark.asyncio
    async def test_template(self) -> None:
        page = html(("<p>", "</p>"), settle(["a", "<b>"]))
        assert await collect(page) == "<p>a&lt;b&gt;</p>"

    @pytest.mark.asyncio
    async def test_plain_async_iterable(self) -> None:
        assert await collect(async_items(["a", "b", "c"])) == "abc"

    @pytest.mark.asyncio
    async def test_plain_sync_iterable(self) -> None:
        assert await collect(["x", "y"]) == "xy"

    @pytest.mark.asyncio
    async def test_empty(self) -> None:
        assert await collect(html(("",))) == ""

    @pytest.mark.asyncio
    async def test_failure_propagates(self) -> None:
        with pytest.raises(ResolutionError) as exc_info:
            await collect(html(("a", "b"), explode()))
        assert isinstance(exc_info.value.__cause__, TimeoutError)


# ---------------------------------------------------------------------------
# ByteStream
# ---------------------------------------------------------------------------


class TestByteStream:
    @pytest.mark.asyncio
    async def test_one_chunk_per_pull(self) -> None:
        source = stream(html(("<p>", "</p>"), "é"))
        assert await source.pull() == b"<p>"
        assert await source.pull() == "é".encode()
        assert await source.pull() == b"</p>"
        assert source.closed is False
        assert await source.pull() is None
        assert source.closed is True

    @pytest.mark.asyncio
    async def test_pull_after_close_returns_none(self) -> None:
        source = stream(html(("x",)))
        assert await source.pull() == b"x"
        assert await source.pull() is None
        assert await source.pull() is None

    @pytest.mark.asyncio
    async def test_async_iteration(self) -> None:
        page = html(("<ul>", "</ul>"), async_items([html(("<li>", "</li>"), "<1>")]))
        body = b"".join([data async for data in stream(page)])
        assert body == b"<ul><li>&lt;1&gt;</li></ul>"

    @pytest.mark.asyncio
    async def test_matches_collect(self) -> None:
        def build():
            return html(("<p>", "", "</p>"), settle("<a>"), mark_safe("<br>"))

        body = b"".join([data async for data in stream(build())])
        assert body.decode() == await collect(build())

    @pytest.mark.asyncio
    async def test_sync_source(self) -> None:
        source = stream(["a", "b"])
        assert [data async for data in source] == [b"a", b"b"]
        assert source.closed is True

    @pytest.mark.asyncio
    async def test_encoding(self) -> None:
        source = ByteStream(["ü"], encoding="utf-16-le")
        assert source.encoding == "utf-16-le"
        assert await source.pull() == "ü".encode("utf-16-le")

    @pytest.mark.asyncio
    async def test_pulls_are_lazy(self) -> None:
        pulled: list[int] = []

        def numbers():
            for n in range(3):
                pulled.append(n)
                yield n

        source = stream(html(("", ""), numbers()))
        assert await source.pull() == b""
        assert pulled == []
        assert await source.pull() == b"0"
        assert pulled == [0]

    @pytest.mark.asyncio
    async def test_error_aborts_source(self) -> None:
        source = stream(html(("<p>", "</p>"), explode()))
        assert await source.pull() == b"<p>"
        with pytest.raises(ResolutionError) as first:
            await source.pull()
        assert source.errored is True
        assert source.closed is False
        # Never a silent close: later pulls surface the same error
        with pytest.raises(ResolutionError) as second:
            await source.pull()
        assert second.value is first.value

    @pytest.mark.asyncio
    async def test_error_ends_async_iteration(self) -> None:
        received: list[bytes] = []
        with pytest.raises(ResolutionError):
            async for data in stream(html(("a", "b"), explode())):
                received.append(data)
        assert received == [b"a"]

    @pytest.mark.asyncio
    async def test_aclose_stops_pulling(self) -> None:
        closed = []

        async def rows():
            try:
                yield "1"
                yield "2"
            finally:
                closed.append(True)

        source = stream(rows())
        assert await source.pull() == b"1"
        await source.aclose()
        assert closed == [True]
        assert source.closed is True
        assert await source.pull() is None

    @pytest.mark.asyncio
    async def test_aclose_template_source(self) -> None:
        source = html(("<p>", "</p>"), async_items(["a", "b"])).stream()
        assert await source.pull() == b"<p>"
        await source.aclose()
        assert await source.pull() is None

    @pytest.mark.asyncio
    async def test_aclose_sync_source(self) -> None:
        closed = []

        def rows():
            try:
                yield "1"
                yield "2"
            finally:
                closed.append(True)

        source = stream(rows())
        assert await source.pull() == b"1"
        await source.aclose()
        assert closed == [True]

    def test_repr(self) -> None:
        assert repr(stream(["a"])) == "<ByteStream utf-8 open>"
