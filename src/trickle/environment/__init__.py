"""Trickle environment: configuration and error types."""

from trickle.environment.core import DEFAULT_ENVIRONMENT, Environment
from trickle.environment.exceptions import (
    ErrorCode,
    MalformedTemplateError,
    NestingDepthError,
    ResolutionError,
    TemplateError,
    TemplateRuntimeError,
)

__all__ = [
    "DEFAULT_ENVIRONMENT",
    "Environment",
    "ErrorCode",
    "MalformedTemplateError",
    "NestingDepthError",
    "ResolutionError",
    "TemplateError",
    "TemplateRuntimeError",
]
