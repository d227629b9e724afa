"""HTML escaping primitives for trickle.

Provides the PCDATA escaper used for every non-safe chunk and the `Markup`
string type that marks text as already-safe HTML.

Complexity:
    ``html_escape()``: O(n) single pass via ``str.translate()``.
"""

from __future__ import annotations

from typing import Any

_ESCAPE_TABLE = str.maketrans(
    {
        "&": "&amp;",
        "<": "&lt;",
        ">": "&gt;",
        '"': "&quot;",
        "'": "&#39;",
    }
)


class Markup(str):
    """A string marked as safe HTML (never escaped on output).

    Concatenation with a plain ``str`` escapes the plain operand, so
    ``Markup("<b>") + "<i>"`` stays safe.

    Example:
        >>> Markup("<br>")
        Markup('<br>')
        >>> Markup("<b>") + "&"
        Markup('<b>&amp;')
    """

    __slots__ = ()

    def __html__(self) -> Markup:
        return self

    def __add__(self, other: Any) -> Markup:
        if isinstance(other, str):
            return Markup(str.__add__(self, html_escape(other)))
        return NotImplemented

    def __radd__(self, other: Any) -> Markup:
        if isinstance(other, str):
            return Markup(str.__add__(html_escape(other), self))
        return NotImplemented

    def __repr__(self) -> str:
        return f"Markup({str.__repr__(self)})"


def html_escape(value: Any) -> str:
    """Escape a value for HTML text content.

    Replaces ``& < > " '`` with their entity forms. Objects exposing
    ``__html__`` (like `Markup`) are returned as their HTML form unescaped.

    Example:
        >>> html_escape("<script>alert('x')</script>")
        '&lt;script&gt;alert(&#39;x&#39;)&lt;/script&gt;'
    """
    if hasattr(value, "__html__"):
        return str(value.__html__())
    return str(value).translate(_ESCAPE_TABLE)
