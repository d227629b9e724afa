"""Pytest configuration and fixtures for trickle tests."""

import pytest

from trickle import Environment


@pytest.fixture
def env():
    """Create a default trickle Environment."""
    return Environment()


@pytest.fixture
def shallow_env():
    """Environment with a tiny nesting limit for depth-guard tests."""
    return Environment(max_depth=3)


@pytest.fixture
def latin1_env():
    """Environment streaming latin-1 bytes."""
    return Environment(encoding="latin-1")


def assert_contains(rendered: str, *expected_parts: str) -> None:
    """Assert rendered output contains all expected parts.

    Args:
        rendered: The actual rendered output.
        expected_parts: Strings that should all be present in the result.
    """
    for part in expected_parts:
        assert part in rendered, (
            f"Rendered output missing expected content:\n"
            f"  Missing: {part!r}\n"
            f"  Actual: {rendered!r}"
        )
