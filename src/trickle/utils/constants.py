"""Shared constants for trickle."""

from __future__ import annotations

# Deepest producer nesting the resolver will follow before giving up.
DEFAULT_MAX_DEPTH: int = 256

DEFAULT_ENCODING: str = "utf-8"
