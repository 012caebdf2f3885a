"""Tests for cleaner.clean_markdown and remove_navigation_lines."""

from markdown_harvest.services.cleaner import clean_markdown, remove_navigation_lines


class TestCleanMarkdownMarkup:
    def test_strips_leftover_html_tags(self):
        assert clean_markdown("Hello <b>world</b>") == "Hello world"

    def test_links_reduced_to_labels(self):
        result = clean_markdown("See [the docs](https://example.com/docs) now")
        assert result == "See the docs now"

    def test_link_with_parenthesised_url(self):
        text = "See [concurrency](https://en.wikipedia.org/wiki/Concurrency_(computer_science)) for details."
        assert clean_markdown(text) == "See concurrency for details."

    def test_removes_bare_urls(self):
        assert clean_markdown("Visit https://example.com today") == "Visit today"

    def test_removes_fenced_code_blocks(self):
        result = clean_markdown("Intro text\n\n```python\nprint(1)\n```\n\nOutro text")
        assert "print" not in result
        assert "```" not in result
        assert "Intro text" in result
        assert "Outro text" in result

    def test_collapses_spaces_and_tabs(self):
        assert clean_markdown("Some  \t spaced   words") == "Some spaced words"

    def test_collapses_blank_line_runs(self):
        result = clean_markdown("First paragraph.\n\n\n\n\nSecond paragraph.")
        assert result == "First paragraph.\n\nSecond paragraph."


class TestCleanMarkdownBoilerplate:
    def test_removes_policy_phrases(self):
        result = clean_markdown("Read our Cookie Policy and privacy policy carefully.")
        assert "cookie policy" not in result.lower()
        assert "privacy policy" not in result.lower()
        assert "carefully" in result

    def test_removes_click_here_and_read_more(self):
        result = clean_markdown("Click here to continue, or read more below.")
        assert "click here" not in result.lower()
        assert "read more" not in result.lower()
        assert "to continue" in result

    def test_removes_portuguese_phrases(self):
        result = clean_markdown("Inscreva-se na nossa lista de leitura semanal.")
        assert "inscreva-se" not in result.lower()

    def test_removes_photo_credit_lines(self):
        result = clean_markdown("Great story here.\nFoto: John Doe\nPhoto: Jane Roe\nMore text here.")
        assert "John Doe" not in result
        assert "Jane Roe" not in result
        assert "Great story here." in result
        assert "More text here." in result


class TestRemoveNavigationLines:
    def test_filters_noise_lines(self):
        lines = [
            "# Menu",
            "Home",
            "",
            "x",
            "Write to me at a@b.com",
            "http://example.com",
            "Footer",
            "Python",
            "Some real sentence.",
        ]
        assert remove_navigation_lines(lines) == ["# Menu", "", "Python", "Some real sentence."]

    def test_navigation_terms_any_case(self):
        assert remove_navigation_lines(["SUBSCRIBE", "Next", "  back  "]) == []

    def test_multi_word_lines_kept(self):
        assert remove_navigation_lines(["Home sweet home"]) == ["Home sweet home"]

    def test_headings_always_kept(self):
        assert remove_navigation_lines(["## Contact"]) == ["## Contact"]


class TestCleanMarkdownPreservesContent:
    def test_normal_content_unchanged(self):
        text = "## Title\n\nSome **bold** and _italic_ content.\n\n- Item one\n- Item two"
        assert clean_markdown(text) == text

    def test_empty_string(self):
        assert clean_markdown("") == ""

    def test_only_noise_becomes_empty(self):
        assert clean_markdown("Home\nAbout\nContact\nhttps://example.com") == ""


class TestCleanMarkdownIdempotent:
    CORPUS = [
        "# Heading\n\nBody paragraph with [a link](https://x.com).\n\n\n\nTail.",
        "Please share  this\tstory with friends.",
        "Intro\n\nAdvertisement\n\n\n\nMain point of the article.\n\nFoto: Someone",
        "Line one\n\n\n\n\n\nLine two\nHome\n\n\n\nLine three",
        "Text with <span>tags</span> and ```code``` and https://bare.example.com/link.",
        "## Section\n\n- a list item\n- another one\n\n> a quote that stays",
    ]

    def test_cleaning_twice_equals_cleaning_once(self):
        for document in self.CORPUS:
            once = clean_markdown(document)
            assert clean_markdown(once) == once
