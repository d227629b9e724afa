"""Reusable components -- templates as plain functions.

A component is a function that returns a template. Passing one template as
a value of another splices its output in place, escaped exactly once.
Lists of components flatten in order.

Run:
    python app.py
"""

from trickle import Template, html, mark_safe


def card(name: str, desc: str) -> Template:
    return html(("<div class=\"card\"><h3>", "</h3><p>", "</p></div>"), name, desc)


def alert(message: str) -> Template:
    return html(("<div class=\"alert\">", "</div>"), message)


def page(title: str, features: list[dict[str, str]], warning: str) -> Template:
    cards = [card(f["name"], f["desc"]) for f in features]
    return html(
        ("<html><head><title>", "</title></head><body>", "<main>", "</main>", "</body></html>"),
        title,
        alert(warning),
        cards,
        mark_safe("<!-- rendered -->"),
    )


features = [
    {"name": "Streaming", "desc": "Chunks leave as soon as they are ready"},
    {"name": "Escaping", "desc": "Values are escaped, <tags> included"},
    {"name": "Zero deps", "desc": "Pure Python, no dependencies"},
]

output = page(
    "Component Demo",
    features,
    "This is an alpha release. API may change.",
).render()


def main() -> None:
    print(output)


if __name__ == "__main__":
    main()
