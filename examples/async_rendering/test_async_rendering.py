"""Tests for the async-rendering example."""

import pytest

from trickle import ErrorCode, TemplateRuntimeError


class TestAsyncRenderingApp:
    """Verify awaitables and async iterables render correctly."""

    def test_await_resolved_in_heading(self, example_app) -> None:
        assert "<h1>Trickle Features</h1>" in example_app.output

    def test_await_resolved_count(self, example_app) -> None:
        assert "Total: 3 features" in example_app.output

    def test_async_items_rendered_all_items(self, example_app) -> None:
        assert "<li>#1: Streaming output</li>" in example_app.output
        assert "<li>#2: Escaping &lt;by default&gt;</li>" in example_app.output
        assert "<li>#3: Zero dependencies</li>" in example_app.output

    def test_template_is_consumed(self, example_app) -> None:
        assert example_app.template.consumed is True

    def test_sync_render_requires_async(self, example_app) -> None:
        with pytest.raises(TemplateRuntimeError) as exc_info:
            example_app.build().render()
        assert exc_info.value.code is ErrorCode.ASYNC_REQUIRED
