from markdownify import markdownify

from markdown_harvest.services.cleaner import clean_markdown
from markdown_harvest.services.sanitizer import sanitize
from markdown_harvest.services.selector import parse_html, select_main


def html_to_markdown(html: str) -> str:
    """Convert a full HTML page into clean Markdown of its main content.

    The main-content fragment is selected first, then cleaned of non-content
    HTML, converted with ATX headings, and finally stripped of residual
    Markdown noise.  Returns an empty string for a page without content.
    """
    fragment = select_main(parse_html(html))
    relevant_html = sanitize(fragment)
    if not relevant_html.strip():
        return ""

    return clean_markdown(markdownify(relevant_html, heading_style="ATX").strip())
