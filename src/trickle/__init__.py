"""Trickle: streaming HTML templates from plain Python values.

Turns static fragments interleaved with dynamic values into a lazy sequence
of HTML-safe text chunks. No template language, no compile step: values are
escaped, flattened and awaited as the output is pulled.

Quickstart:
    >>> from trickle import html, mark_safe
    >>> html(("<p>", "</p>"), "<b>hi</b>").render()
    '<p>&lt;b&gt;hi&lt;/b&gt;</p>'
    >>> html(("", ""), mark_safe("<br>")).render()
    '<br>'

Template strings (Python 3.14+):
    >>> items = ["a ", mark_safe("<br> "), "<x> ", 5]
    >>> html(t"<p>{items}</p>").render()
    '<p>a <br> &lt;x&gt; 5</p>'

Async values and streaming:
    ```python
    async def index(request):
        page = html(t"<h1>{fetch_title()}</h1><ul>{rows_from_cursor()}</ul>")
        return StreamingResponse(stream(page), media_type="text/html")
    ```

Value Rules:
- ``str``: escaped (``& < > " '``)
- ``Markup`` / ``mark_safe(...)`` / objects with ``__html__``: verbatim
- lists, tuples, generators, async generators: flattened depth-first
- nested ``html(...)`` invocations: spliced in, never escaped twice
- coroutines, futures, tasks: awaited, then resolved by the same rules
- Enum members: their name
- anything else: ``str(value)``, escaped

Consumption:
- ``collect(page)`` / ``page.render_async()``: whole string
- ``stream(page)``: pull-driven UTF-8 byte source, one chunk per pull
- ``page.render()`` / ``for chunk in page``: sync, when nothing needs awaiting

Every invocation is single-use and shares no state with any other, so
concurrent renders need no coordination.
"""

from trickle.consumers import ByteStream, collect, stream
from trickle.environment import (
    DEFAULT_ENVIRONMENT,
    Environment,
    ErrorCode,
    MalformedTemplateError,
    NestingDepthError,
    ResolutionError,
    TemplateError,
    TemplateRuntimeError,
)
from trickle.resolver import ChunkStream, resolve, resolve_sync
from trickle.template import Markup, Template
from trickle.tstring import html
from trickle.utils.html import html_escape
from trickle.values import (
    Deferred,
    PlainString,
    Producer,
    SafeString,
    Scalar,
    Value,
    classify,
    mark_safe,
)

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_ENVIRONMENT",
    "ByteStream",
    "ChunkStream",
    "Deferred",
    "Environment",
    "ErrorCode",
    "MalformedTemplateError",
    "Markup",
    "NestingDepthError",
    "PlainString",
    "Producer",
    "ResolutionError",
    "SafeString",
    "Scalar",
    "Template",
    "TemplateError",
    "TemplateRuntimeError",
    "Value",
    "classify",
    "collect",
    "html",
    "html_escape",
    "mark_safe",
    "resolve",
    "resolve_sync",
    "stream",
]
