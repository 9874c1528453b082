"""Byte sinks -- render one fragment to a file and to a failing socket.

The render callback only sees a text sink. When the underlying byte sink
fails, render_to_byte_sink() raises the sink's own OSError.

Run:
    python app.py
"""

import errno
import io

from ember import make_markup, render_nested, write_escaped, write_raw

ponies = ["Apple Bloom", "Scootaloo", "Sweetie Belle"]


def _item(pony):
    def _render(sink):
        write_raw(sink, "<li>")
        write_escaped(sink, pony)
        write_raw(sink, "</li>")

    return make_markup(_render)


def _render_list(sink):
    write_raw(sink, "<ul>")
    for pony in ponies:
        render_nested(sink, _item(pony))
    write_raw(sink, "</ul>")


page = make_markup(_render_list)


class HungUpSocket:
    """Accepts ``budget`` writes, then reports a broken pipe."""

    def __init__(self, budget: int) -> None:
        self.budget = budget
        self.sent = bytearray()

    def write(self, data: bytes) -> int:
        if self.budget == 0:
            raise BrokenPipeError(errno.EPIPE, "peer hung up")
        self.budget -= 1
        self.sent += data
        return len(data)


buffer = io.BytesIO()
page.render_to_byte_sink(buffer)
rendered_bytes = buffer.getvalue()

socket = HungUpSocket(budget=2)
try:
    page.render_to_byte_sink(socket)
except OSError as exc:
    failure = exc
else:
    failure = None


def main() -> None:
    print(rendered_bytes.decode())
    print(f"sent before failure: {bytes(socket.sent)!r}")
    print(f"error: {failure!r}")


if __name__ == "__main__":
    main()
