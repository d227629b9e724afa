"""Tests for the concurrent rendering example."""


class TestConcurrentApp:
    """Verify 8 threads render correctly without cross-contamination."""

    def test_all_pages_rendered(self, example_app) -> None:
        assert len(example_app.results) == 8

    def test_each_page_has_correct_id(self, example_app) -> None:
        for i, page in enumerate(example_app.results):
            assert page.startswith(f'<article id="page-{i}">')

    def test_no_cross_contamination(self, example_app) -> None:
        """Each page should only contain its own tags, not another page's."""
        for i, page in enumerate(example_app.results):
            assert f"<li>tag-{i}-a</li><li>tag-{i}-b</li><li>tag-{i}-c</li>" in page
            for j in range(8):
                if j != i:
                    assert f"tag-{j}-a" not in page

    def test_results_are_distinct(self, example_app) -> None:
        assert len(set(example_app.results)) == 8
