"""FastAPI integration -- streaming template responses.

Wraps a template in a pull-driven `ByteStream` and hands it to FastAPI's
StreamingResponse. Each chunk is encoded and sent as soon as it resolves,
while an async data source is still producing rows.

Requires: fastapi, uvicorn, httpx (optional -- skips gracefully)

Run:
    uvicorn app:app --reload
"""

from collections.abc import AsyncIterator

fastapi = None
try:
    from fastapi import FastAPI
    from fastapi.responses import HTMLResponse, StreamingResponse

    fastapi = FastAPI  # sentinel for importskip
except ImportError:
    pass

from trickle import Template, html, stream


async def fetch_items() -> AsyncIterator[dict]:
    """Simulate an async data source (database cursor, API, etc.)."""
    items = [
        {"name": "Revenue", "value": "$1.2M"},
        {"name": "Users", "value": "45,000"},
        {"name": "Orders", "value": "12,350"},
    ]
    for item in items:
        yield item


async def rows() -> AsyncIterator[Template]:
    async for item in fetch_items():
        yield html(("<tr><td>", "</td><td>", "</td></tr>"), item["name"], item["value"])


def dashboard(title: str) -> Template:
    return html(
        ("<!DOCTYPE html><html><body><h1>", "</h1><table>", "</table></body></html>"),
        title,
        rows(),
    )


if fastapi is not None:
    app = FastAPI()

    @app.get("/")
    async def index() -> StreamingResponse:
        """Stream the dashboard as an HTTP response."""
        return StreamingResponse(stream(dashboard("Dashboard")), media_type="text/html")

    @app.get("/full")
    async def full() -> HTMLResponse:
        """Render the whole page before responding, for comparison."""
        return HTMLResponse(await dashboard("Dashboard").render_async())
else:
    app = None  # type: ignore[assignment]


# For test access via example_app fixture
output = "FastAPI example (run with uvicorn)"


def main() -> None:
    if fastapi is None:
        print("FastAPI not installed. Install with: pip install fastapi uvicorn")
        return
    print("Run with: uvicorn app:app --reload")
    print("Endpoints:")
    print("  GET /     -- streaming response")
    print("  GET /full -- full render response")


if __name__ == "__main__":
    main()
