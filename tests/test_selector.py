"""Tests for selector.select_main."""

from markdown_harvest.services.selector import parse_html, select_main


class TestSelectMain:
    def test_article_preferred_over_nav(self):
        html = (
            "<html><body><nav><a href='/'>Home</a></nav>"
            "<article><p>Story text</p></article></body></html>"
        )
        result = select_main(html)
        assert "Story text" in result
        assert "Home" not in result

    def test_returns_inner_html(self):
        result = select_main("<html><body><article><p>Inner</p></article></body></html>")
        assert result == "<p>Inner</p>"

    def test_main_used_without_article(self):
        html = "<html><body><div>Sidebar</div><main><p>Main body</p></main></body></html>"
        result = select_main(html)
        assert "Main body" in result
        assert "Sidebar" not in result

    def test_role_main(self):
        html = '<html><body><div>Other</div><div role="main"><p>Role content</p></div></body></html>'
        assert "Role content" in select_main(html)
        assert "Other" not in select_main(html)

    def test_first_tier_wins_over_second(self):
        html = (
            "<html><body><div class='content'><p>Class content</p></div>"
            "<main><p>Main content</p></main></body></html>"
        )
        result = select_main(html)
        assert "Main content" in result
        assert "Class content" not in result

    def test_class_selectors_in_order(self):
        html = (
            "<html><body><div class='post'><p>Post text</p></div>"
            "<div class='content'><p>Content text</p></div></body></html>"
        )
        assert "Content text" in select_main(html)

    def test_first_article_wins(self):
        html = (
            "<html><body><article><p>First</p></article>"
            "<article><p>Second</p></article></body></html>"
        )
        result = select_main(html)
        assert "First" in result
        assert "Second" not in result

    def test_body_fallback(self):
        html = "<html><body><div><p>Loose text</p></div><footer>Foot</footer></body></html>"
        result = select_main(html)
        assert "Loose text" in result
        assert "Foot" in result

    def test_empty_document(self):
        assert select_main("") == ""

    def test_accepts_parsed_document(self):
        soup = parse_html("<html><body><article><p>Parsed</p></article></body></html>")
        assert "Parsed" in select_main(soup)
