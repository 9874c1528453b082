"""Tests for the byte_sink example."""


class TestByteSinkApp:
    """Verify the byte_sink example works correctly."""

    def test_bytes_match_string(self, example_app) -> None:
        assert example_app.rendered_bytes == example_app.page.to_string().encode()

    def test_real_error_surfaces(self, example_app) -> None:
        assert isinstance(example_app.failure, BrokenPipeError)
        assert example_app.failure.strerror == "peer hung up"

    def test_partial_output_kept(self, example_app) -> None:
        assert bytes(example_app.socket.sent) == b"<ul><li>"
