import re
from typing import Iterable, List, Union

from bs4 import BeautifulSoup, Comment, Tag

from markdown_harvest.services.selector import parse_html

_SCRIPT_TAGS = ["script", "style"]

_MEDIA_TAGS = ["img", "iframe", "video", "audio", "canvas", "svg", "embed", "object"]

_STRUCTURAL_TAGS = ["nav", "header", "footer", "aside"]

# class/id vocabulary marking a div/section as boilerplate.  Each keyword must
# start a class token; "ad"/"ads" must also end one so "address" or "header" survive.
_BOILERPLATE_ATTR_RE = re.compile(
    r"(?:^|[\s_-])(?:ads?(?=$|[\s_-])|advertisement|nav|menu|sidebar|sponsor|cookie"
    r"|privacy|social|share|comment|related|avatar|wp-image)",
    re.IGNORECASE,
)

# class vocabulary marking an <a> or <span> as decoration
_DECORATIVE_CLASS_RE = re.compile(
    r"(?:^|[\s_-])(?:avatar|wp-image|button|btn|social|share)",
    re.IGNORECASE,
)

# Matches `display:none` or `visibility:hidden` in inline style attributes
_HIDDEN_STYLE_RE = re.compile(
    r"(display\s*:\s*none|visibility\s*:\s*hidden)", re.IGNORECASE
)

CONTENT_CONTAINER_SELECTORS = "article, main, [role='main'], .content, .article, .post, .entry"

TEXT_ELEMENT_SELECTORS = "h1, h2, h3, h4, h5, h6, p, ul, ol, blockquote, pre, table"


def _root(soup: BeautifulSoup) -> Union[BeautifulSoup, Tag]:
    """Return the element holding a parsed fragment (lxml wraps it in <body>)."""
    return soup.body or soup


def _attr_text(tag: Tag, name: str) -> str:
    value = tag.get(name)
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        return " ".join(value)
    return str(value)


def _decompose_all(tags: Iterable[Tag]) -> None:
    for tag in list(tags):
        # A parent removed earlier in the loop takes its descendants with it
        if not tag.decomposed:
            tag.decompose()


def _outermost(nodes: Iterable[Tag]) -> List[Tag]:
    """Keep only nodes that are not nested inside an earlier kept node."""
    kept: List[Tag] = []
    kept_ids: set = set()
    for node in nodes:
        if any(id(parent) in kept_ids for parent in node.parents):
            continue
        kept.append(node)
        kept_ids.add(id(node))
    return kept


def strip_scripts_and_styles(soup: BeautifulSoup) -> None:
    _decompose_all(soup.find_all(_SCRIPT_TAGS))
    for comment in soup.find_all(string=lambda text: isinstance(text, Comment)):
        comment.extract()


def strip_media(soup: BeautifulSoup) -> None:
    _decompose_all(soup.find_all(_MEDIA_TAGS))


def is_boilerplate_block(tag: Tag) -> bool:
    """Return True when a div/section's class or id names a non-content block."""
    if tag.name not in ("div", "section") or not tag.attrs:
        return False
    return any(
        _BOILERPLATE_ATTR_RE.search(_attr_text(tag, attr)) for attr in ("class", "id")
    )


def strip_structural_noise(soup: BeautifulSoup) -> None:
    _decompose_all(soup.find_all(_STRUCTURAL_TAGS))
    _decompose_all(tag for tag in soup.find_all(["div", "section"]) if is_boilerplate_block(tag))


def refine_content(soup: BeautifulSoup) -> str:
    """Narrow the cleaned fragment down to its content-bearing HTML.

    Prefers content containers, then individual text elements (headings,
    paragraphs, lists, quotes, preformatted blocks, tables), and finally the
    whole cleaned fragment.  Nested matches are only emitted once, through
    their outermost ancestor, in document order.
    """
    root = _root(soup)

    containers = _outermost(root.select(CONTENT_CONTAINER_SELECTORS))
    if containers:
        return "\n".join(str(node) for node in containers)

    text_elements = _outermost(root.select(TEXT_ELEMENT_SELECTORS))
    relevant_html = "\n".join(str(node) for node in text_elements)
    if relevant_html.strip():
        return relevant_html

    return root.decode_contents()


def strip_decorative(soup: BeautifulSoup) -> None:
    decorative = (
        tag
        for tag in soup.find_all(["a", "span"])
        if _DECORATIVE_CLASS_RE.search(_attr_text(tag, "class"))
    )
    _decompose_all(decorative)

    hidden = (
        tag
        for tag in soup.find_all(True)
        if _HIDDEN_STYLE_RE.search(_attr_text(tag, "style"))
    )
    _decompose_all(hidden)


def sanitize(fragment: str) -> str:
    """Remove non-content HTML from *fragment* and return the cleaned HTML.

    Steps run in order, each on what the previous one left: scripts, styles
    and comments; media; structural and boilerplate blocks; content
    refinement; decorative and hidden elements.
    """
    if not fragment.strip():
        return ""

    soup = parse_html(fragment)
    strip_scripts_and_styles(soup)
    strip_media(soup)
    strip_structural_noise(soup)

    # Re-parse what survived before narrowing it down
    relevant_html = refine_content(parse_html(_root(soup).decode_contents()))

    final_soup = parse_html(relevant_html)
    strip_decorative(final_soup)
    return _root(final_soup).decode_contents()
