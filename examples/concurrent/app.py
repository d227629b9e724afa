"""Concurrent rendering -- independent invocations across 8 threads.

Every template invocation owns its fragments, values and resolver state,
so simultaneous renders never see each other's data.

Run:
    python app.py
"""

from concurrent.futures import ThreadPoolExecutor

from trickle import html

pages = [
    {"page_id": i, "title": f"Page {i}", "tags": [f"tag-{i}-a", f"tag-{i}-b", f"tag-{i}-c"]}
    for i in range(8)
]


def render_page(page: dict) -> str:
    """Render a single page -- called from a worker thread."""
    tags = [html(("<li>", "</li>"), tag) for tag in page["tags"]]
    template = html(
        ('<article id="page-', '"><h1>', "</h1><ul>", "</ul></article>"),
        page["page_id"],
        page["title"],
        tags,
    )
    return template.render()


with ThreadPoolExecutor(max_workers=8) as pool:
    results = list(pool.map(render_page, pages))

output = "\n".join(results)


def main() -> None:
    print(f"Rendered {len(results)} pages across 8 threads:\n")
    for i, page in enumerate(results):
        print(f"--- Thread {i} ---")
        print(page)
        print()


if __name__ == "__main__":
    main()
