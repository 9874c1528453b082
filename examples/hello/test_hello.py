"""Tests for the hello example."""


class TestHelloApp:
    """Verify the hello example works correctly."""

    def test_output_is_escaped(self, example_app) -> None:
        assert example_app.output == "<h1>Hello, &lt;World &amp; Friends&gt;!</h1>"

    def test_rerender_is_identical(self, example_app) -> None:
        assert example_app.page.to_string() == example_app.output
