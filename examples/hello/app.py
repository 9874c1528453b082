"""Hello -- a fragment built the way generated template code builds one.

Run:
    python app.py
"""

from ember import make_markup, write_escaped, write_raw

name = "<World & Friends>"


def _render(sink):
    write_raw(sink, "<h1>Hello, ")
    write_escaped(sink, name)
    write_raw(sink, "!</h1>")


page = make_markup(_render)
output = page.to_string()


def main() -> None:
    print(output)


if __name__ == "__main__":
    main()
