"""Template entry point: ``html()``.

Accepts the fragments/values pair either explicitly or as a PEP 750
template string (Python 3.14+ ``t"..."`` literals):

    >>> name = "<World>"
    >>> html(("Hello ", "!"), name).render()
    'Hello &lt;World&gt;!'
    >>> html(t"Hello {name}!").render()          # Python 3.14+
    'Hello &lt;World&gt;!'

Any object that structurally matches the template protocol works, so older
interpreters (and tests) can pass compatible objects.
"""

from __future__ import annotations

import inspect
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from trickle.template import Template

if TYPE_CHECKING:
    from trickle.environment.core import Environment


@runtime_checkable
class TemplateProtocol(Protocol):
    """``string.templatelib.Template`` or any structurally compatible object."""

    strings: tuple[str, ...]
    interpolations: tuple[Any, ...]


_CONVERTERS: dict[str, Callable[[Any], str]] = {"s": str, "r": repr, "a": ascii}


def _format(value: Any, conversion: str | None, format_spec: str) -> str:
    if conversion:
        try:
            value = _CONVERTERS[conversion](value)
        except KeyError:
            raise ValueError(f"Unknown conversion '!{conversion}'") from None
    return format(value, format_spec)


async def _format_settled(awaitable: Awaitable[Any], conversion: str | None, format_spec: str) -> str:
    return _format(await awaitable, conversion, format_spec)


def _interpolation_value(interpolation: Any) -> Any:
    """Value of one interpolation with its ``!conversion`` and ``:spec`` applied."""
    value = interpolation.value
    conversion = getattr(interpolation, "conversion", None)
    format_spec = getattr(interpolation, "format_spec", "") or ""
    if not conversion and not format_spec:
        return value
    if inspect.isawaitable(value):
        return _format_settled(value, conversion, format_spec)
    return _format(value, conversion, format_spec)


def html(template: Any, *values: Any, env: Environment | None = None) -> Template:
    """Build a template invocation.

    Args:
        template: A t-string (or compatible object), a sequence of static
            fragments, or a single str for a template without values
        *values: Dynamic values when ``template`` is a fragment sequence
        env: Environment to render with (default environment if omitted)

    Returns:
        A single-use `Template`.

    Raises:
        TypeError: Extra values passed alongside a t-string.
        MalformedTemplateError: Fragment and value counts do not line up.
    """
    if isinstance(template, TemplateProtocol):
        if values:
            raise TypeError("html() takes no extra values when given a template string")
        return Template(
            template.strings,
            [_interpolation_value(i) for i in template.interpolations],
            env=env,
        )
    if isinstance(template, str):
        return Template((template,), values, env=env)
    return Template(template, values, env=env)
