"""Tests for the hello example."""

import pytest

from trickle import TemplateRuntimeError


class TestHelloApp:
    """Verify the hello example renders correctly."""

    def test_output_is_escaped(self, example_app) -> None:
        assert example_app.output == "<h1>Hello, &lt;World&gt;!</h1>"

    def test_safe_value_verbatim(self, example_app) -> None:
        assert example_app.greeting == "<p><em>welcome</em></p>"

    def test_template_is_single_use(self, example_app) -> None:
        with pytest.raises(TemplateRuntimeError):
            example_app.template.render()
