"""Trickle Environment: rendering configuration shared by invocations.

An Environment holds the knobs that apply to every template built from it:

    >>> env = Environment(max_depth=32, encoding="utf-8")
    >>> page = env.html(("<p>", "</p>"), "<hi>")
    >>> page.render()
    '<p>&lt;hi&gt;</p>'

Environments are frozen dataclasses: safe to share across threads and
concurrent renders. There is no template cache; each ``html()`` call builds
an independent, single-use invocation.
"""

from __future__ import annotations

import codecs
from collections.abc import AsyncIterable, Callable, Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from trickle.utils.constants import DEFAULT_ENCODING, DEFAULT_MAX_DEPTH
from trickle.utils.html import html_escape

if TYPE_CHECKING:
    from trickle.consumers import ByteStream
    from trickle.template import Template


@dataclass(frozen=True, slots=True)
class Environment:
    """Rendering configuration.

    Attributes:
        max_depth: Deepest producer nesting followed before NestingDepthError
        encoding: Text encoding used by byte streams
        escape: PCDATA escaper applied to every non-safe chunk
    """

    max_depth: int = DEFAULT_MAX_DEPTH
    encoding: str = DEFAULT_ENCODING
    escape: Callable[[str], str] = html_escape

    def __post_init__(self) -> None:
        if self.max_depth < 1:
            raise ValueError(f"max_depth must be at least 1, got {self.max_depth}")
        # Raises LookupError for unknown codecs
        codecs.lookup(self.encoding)

    def html(self, template: Any, *values: Any) -> Template:
        """Build a template invocation bound to this environment."""
        from trickle.tstring import html

        return html(template, *values, env=self)

    def stream(self, chunks: AsyncIterable[str] | Iterable[str]) -> ByteStream:
        """Adapt a chunk sequence into a byte source using this encoding."""
        from trickle.consumers import stream

        return stream(chunks, encoding=self.encoding)


DEFAULT_ENVIRONMENT = Environment()
