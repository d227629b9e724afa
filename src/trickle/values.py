"""Dynamic value model: the closed union the resolver works on.

Host code may pass anything as a template value. `classify()` inspects the
host-native shape exactly once and converts it into one of five variants:

    Scalar       non-string, non-producer value, already stringified
    PlainString  a str that must be escaped
    SafeString   text emitted verbatim
    Producer     a sync or async iterable of further values
    Deferred     an awaitable whose result is classified once it settles

Precedence: Value → awaitable → Enum member → str → nested template →
bytes/mapping → iterable → ``__html__`` object → anything else.
"""

from __future__ import annotations

import inspect
from collections.abc import AsyncIterable, Awaitable, Iterable, Mapping
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Protocol, runtime_checkable

from trickle.utils.html import Markup


@dataclass(frozen=True, slots=True)
class Scalar:
    text: str


@dataclass(frozen=True, slots=True)
class PlainString:
    text: str


@dataclass(frozen=True, slots=True)
class SafeString:
    text: str


@dataclass(frozen=True, slots=True)
class Producer:
    """A sequence of further values, flattened in place.

    Attributes:
        items: Sync or async iterable of values
        already_safe: Strings yielded directly by ``items`` are finalized
            HTML and are emitted without escaping
    """

    items: Iterable[Any] | AsyncIterable[Any]
    already_safe: bool = False

    @property
    def is_async(self) -> bool:
        return hasattr(self.items, "__aiter__")


@dataclass(frozen=True, slots=True)
class Deferred:
    awaitable: Awaitable[Any]


Value = Scalar | PlainString | SafeString | Producer | Deferred

_VALUE_TYPES = (Scalar, PlainString, SafeString, Producer, Deferred)

# Iterable in Python, but data rather than a sequence of template values
_OPAQUE_TYPES = (bytes, bytearray, memoryview, Mapping)


@runtime_checkable
class ProducerSource(Protocol):
    """Objects that know how to present themselves as a `Producer`.

    Implemented by `trickle.template.Template` so a nested invocation is
    recognized without this module importing it.
    """

    def as_producer(self) -> Producer: ...


def _is_iterable(value: Any) -> bool:
    return hasattr(value, "__aiter__") or hasattr(value, "__iter__")


def classify(value: Any) -> Value:
    """Convert a host value into a `Value` variant.

    Example:
        >>> classify("<b>")
        PlainString(text='<b>')
        >>> classify(Markup("<b>"))
        SafeString(text='<b>')
        >>> classify(None)
        Scalar(text='None')
    """
    if isinstance(value, _VALUE_TYPES):
        return value
    if inspect.isawaitable(value):
        return Deferred(value)
    if isinstance(value, Enum):
        return Scalar(value.name)
    if isinstance(value, str):
        if hasattr(value, "__html__"):
            return SafeString(str(value.__html__()))
        return PlainString(value)
    if isinstance(value, ProducerSource):
        return value.as_producer()
    if isinstance(value, _OPAQUE_TYPES):
        return Scalar(str(value))
    if _is_iterable(value):
        return Producer(value, already_safe=hasattr(value, "__html__"))
    if hasattr(value, "__html__"):
        return SafeString(str(value.__html__()))
    return Scalar(str(value))


def mark_safe(value: Any) -> Markup | Producer:
    """Mark a value as safe HTML that is emitted without escaping.

    Strings become `Markup`. Nested templates are already safe and become
    their own producer. Iterables become a `Producer` whose directly
    yielded strings are trusted; values nested deeper are still classified
    (and escaped) normally.

    Example:
        >>> mark_safe("<br>")
        Markup('<br>')
        >>> mark_safe(None)
        Markup('')
    """
    if isinstance(value, Producer):
        return replace(value, already_safe=True)
    if isinstance(value, str):
        return Markup(value)
    if value is None:
        return Markup("")
    if isinstance(value, ProducerSource):
        return value.as_producer()
    if not isinstance(value, _OPAQUE_TYPES) and _is_iterable(value):
        return Producer(value, already_safe=True)
    if hasattr(value, "__html__"):
        return Markup(value.__html__())
    return Markup(str(value))
