import logging
from typing import Any, Callable, List, Optional, Union

from markdown_harvest.models.http_config import HttpConfig
from markdown_harvest.models.results import FetchResult, HarvestRecord
from markdown_harvest.services.chunker import split_markdown, validate_chunk_params
from markdown_harvest.services.extractor import html_to_markdown
from markdown_harvest.services.fetcher import fetch_all, fetch_all_streaming, invoke_callback
from markdown_harvest.services.url_extractor import extract_urls

logger = logging.getLogger(__name__)

ResultCallback = Callable[[Optional[str], Any], Any]
PageTransform = Callable[[str, str], Union[str, List[str]]]


def _to_markdown(url: str, html: str) -> str:
    markdown = html_to_markdown(html)
    logger.info("Harvester: cleaned content from %s (%d characters)", url, len(markdown))
    return markdown


def _chunking(chunk_size: int, chunk_overlap: Optional[int]) -> PageTransform:
    def transform(url: str, html: str) -> List[str]:
        chunks = split_markdown(_to_markdown(url, html), chunk_size, chunk_overlap)
        logger.debug("Harvester: %d chunks for %s", len(chunks), url)
        return chunks

    return transform


async def _stream(
    text: str,
    http_config: Optional[HttpConfig],
    on_result: ResultCallback,
    transform: PageTransform,
) -> None:
    urls = extract_urls(text)
    if not urls:
        logger.info("Harvester: no URLs found in input text")

    async def on_fetched(result: Optional[FetchResult]) -> None:
        if result is None:
            await invoke_callback(on_result, None, None)
        elif result.ok:
            await invoke_callback(on_result, result.url, transform(result.url, result.body))
        else:
            await invoke_callback(on_result, result.url, None)

    await fetch_all_streaming(urls, http_config, on_fetched)


def harvest(text: str, http_config: Optional[HttpConfig] = None) -> List[HarvestRecord]:
    """Fetch every URL found in *text* in turn and return its cleaned Markdown.

    URLs that fail to fetch are logged and omitted.  Returns ``[]`` when
    *text* holds no URL.
    """
    urls = extract_urls(text)
    if not urls:
        logger.info("Harvester: no URLs found in input text")
        return []

    return [
        HarvestRecord(url=url, content=_to_markdown(url, html))
        for url, html in fetch_all(urls, http_config)
    ]


async def harvest_streaming(
    text: str,
    http_config: Optional[HttpConfig],
    on_result: ResultCallback,
) -> None:
    """Concurrently fetch every URL in *text*, passing ``(url, markdown)`` to *on_result*.

    Results arrive in completion order.  A URL that fails to fetch is passed
    as ``(url, None)``; text without any URL gives a single ``(None, None)``.
    *on_result* may be a plain function or a coroutine function, and
    exceptions it raises propagate.
    """
    await _stream(text, http_config, on_result, _to_markdown)


def harvest_chunks(
    text: str,
    http_config: Optional[HttpConfig],
    chunk_size: int,
    chunk_overlap: Optional[int] = None,
) -> List[HarvestRecord]:
    """Like :func:`harvest`, with each page's Markdown split into chunks.

    Returns ``[]`` without fetching anything when the chunk parameters are
    invalid (``chunk_overlap >= chunk_size``).
    """
    if not validate_chunk_params(chunk_size, chunk_overlap):
        return []

    return [
        HarvestRecord(url=record.url, content=split_markdown(record.content, chunk_size, chunk_overlap))
        for record in harvest(text, http_config)
    ]


async def harvest_chunks_streaming(
    text: str,
    http_config: Optional[HttpConfig],
    chunk_size: int,
    chunk_overlap: Optional[int],
    on_result: ResultCallback,
) -> None:
    """Like :func:`harvest_streaming`, passing ``(url, [chunk, ...])`` per page.

    Each page is chunked as soon as its own fetch completes.  With invalid
    chunk parameters nothing is fetched and *on_result* is never called.
    """
    if not validate_chunk_params(chunk_size, chunk_overlap):
        return

    await _stream(text, http_config, on_result, _chunking(chunk_size, chunk_overlap))
