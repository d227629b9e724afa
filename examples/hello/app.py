"""Hello World -- the simplest trickle example.

Build a template from static fragments and one value, then render it.
The value is escaped; the fragments are not.

Run:
    python app.py
"""

from trickle import html, mark_safe

name = "<World>"

# Fragments on either side of one value
template = html(("<h1>Hello, ", "!</h1>"), name)

output = template.render()

# Safe values skip escaping
greeting = html(("<p>", "</p>"), mark_safe("<em>welcome</em>")).render()


def main() -> None:
    print(output)
    print(greeting)
    print()

    # Templates are single-use: build one per render
    for who in ["Trickle", "Python", "a & b"]:
        print(html(("Hello, ", "!"), who).render())


if __name__ == "__main__":
    main()
