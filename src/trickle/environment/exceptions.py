"""Exceptions for trickle templates.

Exception Hierarchy:
TemplateError (base)
├── MalformedTemplateError    # Fragments/values mismatch at construction
└── TemplateRuntimeError      # Failure while producing chunks
    ├── ResolutionError       # Deferred value or producer failed
    └── NestingDepthError     # Producers nested deeper than max_depth

Error Messages:
Runtime errors name the dynamic value position that failed, the offending
value and its type, and an actionable suggestion:

    ```
    T-RES-001: Deferred value failed: ConnectionError: timed out
      Position: value #2
      Values:
        value = <coroutine object fetch_user at 0x...> (coroutine)
      Hint: Handle failures inside the awaitable if a fallback is wanted
    ```

There is no recovery path: a failed value fails the whole sequence and no
further chunks are produced after it.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorCode(Enum):
    """Searchable error codes for trickle errors.

    Format: T-{CATEGORY}-{NUMBER}
    Categories: TPL (construction), RUN (runtime), RES (resolution)
    """

    # Construction errors (T-TPL-xxx)
    MALFORMED_TEMPLATE = "T-TPL-001"

    # Runtime errors (T-RUN-xxx)
    RUNTIME_ERROR = "T-RUN-001"
    ASYNC_REQUIRED = "T-RUN-002"
    ALREADY_CONSUMED = "T-RUN-003"

    # Resolution errors (T-RES-xxx)
    DEFERRED_FAILED = "T-RES-001"
    PRODUCER_FAILED = "T-RES-002"
    NESTING_DEPTH = "T-RES-003"

    @property
    def category(self) -> str:
        """Error category (e.g., 'runtime', 'resolution', 'template')."""
        prefix = self.value.split("-")[1]
        return {
            "TPL": "template",
            "RUN": "runtime",
            "RES": "resolution",
        }.get(prefix, "unknown")


def _describe(exc: BaseException) -> str:
    detail = str(exc).strip()
    name = type(exc).__name__
    return f"{name}: {detail}" if detail else name


class TemplateError(Exception):
    """Base exception for all trickle errors.

    Enables broad exception handling:

        >>> try:
        ...     await collect(page)
        ... except TemplateError as e:
        ...     log.error(f"Template error: {e}")

    Attributes:
        code: Optional ErrorCode for searchable error identification.
    """

    code: ErrorCode | None = None

    def format_compact(self) -> str:
        """Format error as a one-line, code-prefixed summary."""
        header = str(self)
        if self.code and self.code.value not in header:
            header = f"{self.code.value}: {header}"
        return header


class MalformedTemplateError(TemplateError, ValueError):
    """Template invocation whose fragments and values do not line up.

    A programmer error, raised when the invocation is constructed and never
    deferred to render time:

        >>> Template(["<p>", "</p>"], [])
        MalformedTemplateError: Template needs len(strings) == len(values) + 1,
        got 2 strings and 0 values
    """

    code: ErrorCode | None = ErrorCode.MALFORMED_TEMPLATE

    def __init__(self, message: str, *, string_count: int, value_count: int):
        self.message = message
        self.string_count = string_count
        self.value_count = value_count
        super().__init__(message)


class TemplateRuntimeError(TemplateError):
    """Failure while producing chunks, with debugging context.

    Attributes:
        message: Error description
        values: Dict of names to offending values, shown with their types
        suggestion: Actionable fix suggestion
        position: Index of the dynamic value being resolved, when known
    """

    code: ErrorCode | None = ErrorCode.RUNTIME_ERROR

    def __init__(
        self,
        message: str,
        *,
        code: ErrorCode | None = None,
        values: dict[str, Any] | None = None,
        suggestion: str | None = None,
        position: int | None = None,
    ):
        self.message = message
        if code is not None:
            self.code = code
        self.values = values or {}
        self.suggestion = suggestion
        self.position = position
        super().__init__(message)

    def __str__(self) -> str:
        # Rebuilt on demand: the sequencer fills in position after raising.
        return self._format_message()

    def _format_message(self) -> str:
        parts = [self.message]

        if self.position is not None:
            parts.append(f"  Position: value #{self.position}")

        if self.values:
            parts.append("  Values:")
            for name, value in self.values.items():
                type_name = type(value).__name__
                value_repr = repr(value)
                if len(value_repr) > 80:
                    value_repr = value_repr[:77] + "..."
                parts.append(f"    {name} = {value_repr} ({type_name})")

        if self.suggestion:
            parts.append(f"  Hint: {self.suggestion}")

        return "\n".join(parts)


class ResolutionError(TemplateRuntimeError):
    """A dynamic value could not be resolved.

    Raised when a deferred value (coroutine, future, task) raises while
    being awaited, or when a producer raises while being iterated. The
    original exception is always chained as ``__cause__``.
    """

    code: ErrorCode | None = ErrorCode.DEFERRED_FAILED

    @classmethod
    def from_deferred(cls, value: Any, error: BaseException) -> ResolutionError:
        return cls(
            f"Deferred value failed: {_describe(error)}",
            code=ErrorCode.DEFERRED_FAILED,
            values={"value": value},
            suggestion="Handle failures inside the awaitable if a fallback is wanted",
        )

    @classmethod
    def from_producer(cls, producer: Any, error: BaseException) -> ResolutionError:
        return cls(
            f"Producer failed while iterating: {_describe(error)}",
            code=ErrorCode.PRODUCER_FAILED,
            values={"producer": producer},
        )


class NestingDepthError(TemplateRuntimeError):
    """Producers nested deeper than the environment's ``max_depth``.

    Usually a self-containing list or a component that embeds itself.
    """

    code: ErrorCode | None = ErrorCode.NESTING_DEPTH

    def __init__(self, max_depth: int, producer: Any):
        self.max_depth = max_depth
        super().__init__(
            f"Producer nesting exceeded max_depth={max_depth}",
            values={"producer": producer},
            suggestion="Check for a list or template that contains itself, "
            "or raise Environment(max_depth=...)",
        )
