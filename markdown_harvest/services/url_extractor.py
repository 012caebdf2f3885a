import re
from typing import List

# Parentheses are allowed in the path for links like /wiki/Concurrency_(computer_science)
URL_PATTERN = re.compile(
    r"https?://[a-zA-Z0-9._/%+()-]+"
    r"(?:/[a-zA-Z0-9._/%+()-]*)*"
    r"(?:\?[a-zA-Z0-9._/%+()=&-]*)?"
)

# Trailing characters that end a sentence rather than a URL
_TRAILING_PUNCTUATION = ".,;!?]}"


def normalize_url(url: str) -> str:
    """Strip trailing sentence punctuation from a matched *url*.

    A trailing ``)`` is only stripped when the parentheses inside the match are
    unbalanced, so ``…/Concurrency_(computer_science).`` keeps its ``)`` while
    ``(see https://example.com).`` loses both ``)`` and ``.``.
    """
    if url.count("(") == url.count(")"):
        return url.rstrip(_TRAILING_PUNCTUATION)
    return url.rstrip(_TRAILING_PUNCTUATION + ")")


def extract_urls(text: str) -> List[str]:
    """Return every URL in *text*, normalised, in order of appearance.

    Duplicates are preserved.  Returns an empty list when *text* has no URL.
    """
    return [normalize_url(match.group(0)) for match in URL_PATTERN.finditer(text)]
