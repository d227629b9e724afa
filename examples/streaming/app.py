"""Streaming -- iterate a template chunk by chunk.

Iterating a template yields each static fragment and each resolved value
as its own chunk, in source order. Generators are pulled lazily, one row
per chunk, so a large report never has to be built in memory first.

Run:
    python app.py
"""

from collections.abc import Iterator

from trickle import html

sections = [
    ("Revenue", "$1.2M"),
    ("Users", "45,000"),
    ("Churn", "2.1%"),
]


def rows() -> Iterator:
    for name, value in sections:
        yield html(("<tr><td>", "</td><td>", "</td></tr>"), name, value)


template = html(
    ("<h1>", "</h1><table>", "</table>"),
    "Quarterly Report",
    rows(),
)

# Collect chunks as they stream
chunks = list(template)
output = "".join(chunks)


def main() -> None:
    print(f"Streamed {len(chunks)} chunks:\n")
    for i, chunk in enumerate(chunks):
        print(f"  [chunk {i}] {chunk!r}")
    print("\n--- Full output ---\n")
    print(output)


if __name__ == "__main__":
    main()
