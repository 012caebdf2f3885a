import re
from typing import Iterable, List, Pattern, Tuple

Substitution = Tuple[Pattern[str], str]

# Phrases dropped wherever they occur (whole word / phrase, any case)
_BOILERPLATE_PHRASES: List[Substitution] = [
    (
        re.compile(
            r"\b(?:advertisement|sponsored|cookie policy|privacy policy|terms of service"
            r"|subscribe|newsletter|follow us|share this|related articles|recommended"
            r"|créditos|tópicos|inscreva-se|mantenha-se informado|acesso livre|editor/a)\b",
            re.IGNORECASE,
        ),
        "",
    ),
    (re.compile(r"\bclick here\b", re.IGNORECASE), ""),
    (re.compile(r"\bread more\b", re.IGNORECASE), ""),
    (re.compile(r"\bsee also\b", re.IGNORECASE), ""),
    (re.compile(r"\bver tópicos\b", re.IGNORECASE), ""),
    (re.compile(r"\bimagem do banner\b", re.IGNORECASE), ""),
    # Photo credit lines
    (re.compile(r"^[ \t]*(?:foto|photo):.*$", re.IGNORECASE | re.MULTILINE), ""),
]

# Applied in order: bare URLs are removed only after links are reduced to labels
_SUBSTITUTIONS_BEFORE_LINE_FILTER: List[Substitution] = [
    # HTML tags the converter left behind
    (re.compile(r"<[^>]+>"), ""),
    # [label](url) -> label
    (re.compile(r"\[([^\]]+)\]\((?:[^()]|\([^()]*\))+\)"), r"\1"),
    # Bare URLs
    (re.compile(r"https?://[^\s]+"), ""),
    # Fenced code blocks
    (re.compile(r"```[\s\S]*?```"), ""),
    (re.compile(r"[ \t]+"), " "),
    (re.compile(r"\n{3,}"), "\n\n"),
    *_BOILERPLATE_PHRASES,
    # Blank runs left behind by the phrase removal
    (re.compile(r"\n\s*\n\s*\n"), "\n\n"),
]

_SUBSTITUTIONS_AFTER_LINE_FILTER: List[Substitution] = [
    (re.compile(r"\n{4,}"), "\n\n\n"),
]

# Single-word lines dropped as navigation/metadata
NAVIGATION_TERMS = frozenset(
    {
        "home",
        "about",
        "contact",
        "menu",
        "search",
        "login",
        "register",
        "subscribe",
        "share",
        "follow",
        "back",
        "next",
        "prev",
        "more",
        "advertisement",
        "ads",
        "sponsored",
        "cookie",
        "privacy",
        "terms",
    }
)

_LAYOUT_WORDS = frozenset({"menu", "navigation", "nav", "footer", "header", "sidebar"})

# Upper bound on repeated passes; each pass only shrinks the text or turns tabs into spaces
_MAX_ROUNDS = 10


def _apply(text: str, substitutions: Iterable[Substitution]) -> str:
    for pattern, replacement in substitutions:
        text = pattern.sub(replacement, text)
    return text


def _keep_line(line: str) -> bool:
    trimmed = line.strip()

    if trimmed.startswith("#"):
        return True
    # Blank lines keep the paragraph spacing
    if not trimmed:
        return True
    if len(trimmed) < 2:
        return False

    lower = trimmed.lower()
    if " " not in trimmed and lower in NAVIGATION_TERMS:
        return False
    if lower.startswith("http") or "@" in lower or lower in _LAYOUT_WORDS:
        return False
    return True


def remove_navigation_lines(lines: Iterable[str]) -> List[str]:
    """Drop lines that look like navigation or metadata, keeping headings and blank lines."""
    return [line for line in lines if _keep_line(line)]


def _clean_once(markdown: str) -> str:
    result = _apply(markdown, _SUBSTITUTIONS_BEFORE_LINE_FILTER)
    result = "\n".join(remove_navigation_lines(result.splitlines()))
    result = _apply(result, _SUBSTITUTIONS_AFTER_LINE_FILTER)
    return result.strip()


def clean_markdown(markdown: str) -> str:
    """Return *markdown* with links, URLs, code blocks, boilerplate and navigation noise removed.

    The pass repeats until the text stops changing, so cleaning clean
    Markdown is a no-op.
    """
    result = markdown
    for _ in range(_MAX_ROUNDS):
        cleaned = _clean_once(result)
        if cleaned == result:
            break
        result = cleaned
    return result
