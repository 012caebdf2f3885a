"""Tests for url_extractor.extract_urls and normalize_url."""

from markdown_harvest.services.url_extractor import extract_urls, normalize_url


class TestExtractUrls:
    def test_finds_http_and_https(self):
        text = "Visit https://example.com and http://test.org/page for details"
        assert extract_urls(text) == ["https://example.com", "http://test.org/page"]

    def test_no_urls_returns_empty_list(self):
        assert extract_urls("Plain text, nothing to fetch here.") == []

    def test_empty_text(self):
        assert extract_urls("") == []

    def test_ignores_other_schemes(self):
        assert extract_urls("ftp://files.example.com and mailto:someone@example.com") == []

    def test_preserves_order_and_duplicates(self):
        text = "https://b.example.com then https://a.example.com then https://b.example.com"
        assert extract_urls(text) == [
            "https://b.example.com",
            "https://a.example.com",
            "https://b.example.com",
        ]

    def test_keeps_query_string(self):
        text = "Search https://example.com/search?q=rust&page=2 now"
        assert extract_urls(text) == ["https://example.com/search?q=rust&page=2"]

    def test_keeps_balanced_parentheses(self):
        text = "Read https://en.wikipedia.org/wiki/Concurrency_(computer_science)."
        assert extract_urls(text) == ["https://en.wikipedia.org/wiki/Concurrency_(computer_science)"]

    def test_drops_unbalanced_closing_parenthesis(self):
        text = "More docs (see https://example.com/docs)."
        assert extract_urls(text) == ["https://example.com/docs"]

    def test_strips_trailing_sentence_punctuation(self):
        text = "Links: https://a.example.com, https://b.example.com; https://c.example.com!"
        assert extract_urls(text) == [
            "https://a.example.com",
            "https://b.example.com",
            "https://c.example.com",
        ]

    def test_url_inside_markdown_link(self):
        text = "See [the book](https://doc.rust-lang.org/book/) for more."
        assert extract_urls(text) == ["https://doc.rust-lang.org/book/"]


class TestNormalizeUrl:
    def test_clean_url_unchanged(self):
        assert normalize_url("https://example.com/path") == "https://example.com/path"

    def test_strips_brackets_and_braces(self):
        assert normalize_url("https://example.com/a]}") == "https://example.com/a"

    def test_strips_lone_closing_parenthesis(self):
        assert normalize_url("https://example.com)") == "https://example.com"

    def test_is_idempotent(self):
        for url in [
            "https://example.com/docs).",
            "https://en.wikipedia.org/wiki/Rust_(programming_language).",
            "https://example.com/search?q=1,",
        ]:
            once = normalize_url(url)
            assert normalize_url(once) == once
