from typing import Optional, Sequence, Union

from bs4 import BeautifulSoup, Tag

# Ordered tiers tried before falling back to <body>
MAIN_CONTENT_TIERS = (
    ("article", "main", '[role="main"]'),
    (".content", ".article", ".post", ".entry"),
)


def parse_html(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "lxml")


def first_match(soup: Union[BeautifulSoup, Tag], selectors: Sequence[str]) -> Optional[Tag]:
    """Return the first element matching *selectors*, trying each selector in order."""
    for selector in selectors:
        node = soup.select_one(selector)
        if node is not None:
            return node
    return None


def select_main(document: Union[str, BeautifulSoup]) -> str:
    """Return the inner HTML of the most likely main-content element.

    Tries ``article``, ``main``, ``[role=main]``, then ``.content``,
    ``.article``, ``.post``, ``.entry``, and finally falls back to the full
    contents of ``<body>``.  The first matching element wins, so only
    the first of several ``<article>`` elements is used.  Returns an empty
    string when the document has no body at all.
    """
    soup = parse_html(document) if isinstance(document, str) else document

    for tier in MAIN_CONTENT_TIERS:
        node = first_match(soup, tier)
        if node is not None:
            return node.decode_contents()

    body = soup.find("body")
    return body.decode_contents() if body is not None else ""
