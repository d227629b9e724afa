"""Async rendering -- awaitables and async iterables as values.

Coroutines are awaited in place and their results rendered like any other
value. Async generators are flattened element by element. Both need the
async path: ``async for``, ``render_async()`` or ``collect()``.

Run:
    python app.py
"""

import asyncio
from collections.abc import AsyncIterator

from trickle import collect, html

# -- Simulated async data sources ----------------------------------------


async def fetch_items() -> AsyncIterator[dict]:
    """Simulate an async data stream (e.g., database cursor, API pagination)."""
    items = [
        {"id": 1, "title": "Streaming output"},
        {"id": 2, "title": "Escaping <by default>"},
        {"id": 3, "title": "Zero dependencies"},
    ]
    for item in items:
        await asyncio.sleep(0)
        yield item


async def fetch_count() -> int:
    """Simulate an async API call that returns a value."""
    await asyncio.sleep(0)
    return 3


async def fetch_title() -> str:
    """Simulate fetching a page title."""
    return "Trickle Features"


async def list_items() -> AsyncIterator:
    async for item in fetch_items():
        yield html(("<li>#", ": ", "</li>"), item["id"], item["title"])


# -- Template setup -------------------------------------------------------


def build():
    return html(
        ("<h1>", "</h1><p>Total: ", " features</p><ul>", "</ul>"),
        fetch_title(),
        fetch_count(),
        list_items(),
    )


template = build()


async def render() -> str:
    """Render the async template by collecting all chunks."""
    return await collect(template)


# Run at import time for test access
output = asyncio.run(render())


def main() -> None:
    print(output)


if __name__ == "__main__":
    main()
