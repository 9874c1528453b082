"""Streaming escape -- escape a large input through a small buffer.

EscapingTransform is a RawIOBase, so it plugs into io.BufferedReader and
io.TextIOWrapper; escape_stream() copies it into any byte sink.

Run:
    python app.py
"""

import io

from ember import EscapingTransform, escape_stream

source_text = "<tr><td>O'Reilly & Sons</td></tr>\n" * 1000
source_bytes = source_text.encode()

# Copy through a 64-byte buffer
sink = io.BytesIO()
written = escape_stream(io.BytesIO(source_bytes), sink, chunk_size=64)
streamed = sink.getvalue()

# Read line by line through the io stack
reader = io.TextIOWrapper(
    io.BufferedReader(EscapingTransform(io.BytesIO(source_bytes))),
    encoding="utf-8",
)
first_line = reader.readline()


def main() -> None:
    print(f"escaped {len(source_bytes)} bytes into {written} bytes")
    print(f"first line: {first_line!r}")


if __name__ == "__main__":
    main()
