import asyncio
import inspect
import logging
from http.cookiejar import CookieJar, DefaultCookiePolicy
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple
from urllib.parse import urljoin, urlparse

import httpx

from markdown_harvest.models.http_config import HttpConfig
from markdown_harvest.models.results import FetchResult
from markdown_harvest.services.user_agent import browser_headers

logger = logging.getLogger(__name__)

MAX_CONTENT_SIZE = 10 * 1024 * 1024  # 10 MB
ALLOWED_SCHEMES = {"http", "https"}

# Per-URL failures: recorded in the FetchResult, never raised to the caller
FETCH_ERRORS = (ValueError, httpx.HTTPError, RuntimeError)

_UNLIMITED_POOL = httpx.Limits(max_connections=None, max_keepalive_connections=None)

# Content types accepted as a page body
_TEXT_CONTENT_MARKERS = ("text/", "html", "xml", "json")


def _validate_url(url: str) -> None:
    """Raise ValueError if *url* is not an http(s) URL with a hostname."""
    parsed = urlparse(url)

    if parsed.scheme not in ALLOWED_SCHEMES:
        raise ValueError(f"Scheme '{parsed.scheme}' is not allowed. Use http or https.")

    if not parsed.hostname:
        raise ValueError("URL must have a valid hostname.")


def _client_options(config: HttpConfig) -> Dict[str, Any]:
    """Keyword arguments shared by the sync and async clients.

    The client-level cookie jar refuses every cookie: cookies live in a jar
    owned by a single fetch so that concurrent URLs never see each other's.
    """
    options: Dict[str, Any] = {
        "follow_redirects": False,
        "cookies": CookieJar(policy=DefaultCookiePolicy(allowed_domains=[])),
    }
    # Leaving timeout unset keeps the httpx default; passing None would disable it.
    if config.timeout_seconds is not None:
        options["timeout"] = config.timeout_seconds
    return options


def _redirect_target(response: httpx.Response, current_url: str) -> str:
    next_url = urljoin(current_url, response.headers.get("location", ""))
    _validate_url(next_url)
    return next_url


def _check_response(response: httpx.Response) -> None:
    """Raise for error statuses, non-text bodies and oversize declared lengths."""
    response.raise_for_status()

    content_type = response.headers.get("content-type", "").lower()
    if content_type and not any(marker in content_type for marker in _TEXT_CONTENT_MARKERS):
        raise RuntimeError(f"Unsupported content type '{content_type}'.")

    content_length = response.headers.get("content-length")
    if content_length and int(content_length) > MAX_CONTENT_SIZE:
        raise RuntimeError("Response body exceeds the maximum allowed size.")


def _decode(response: httpx.Response, chunks: List[bytes]) -> str:
    # Strict decoding: a body that does not match its charset is a failed fetch.
    return b"".join(chunks).decode(response.encoding or "utf-8")


def _fetch(client: httpx.Client, url: str, config: HttpConfig) -> str:
    """Fetch *url* with *client* and return the decoded body.

    Raises:
        ValueError: if the URL or a redirect target is invalid, or the body
            cannot be decoded.
        httpx.HTTPError: on network, timeout or HTTP status errors.
        RuntimeError: on oversize or non-text bodies, or too many redirects.
    """
    _validate_url(url)

    headers = browser_headers()
    cookies = httpx.Cookies()
    current_url = url
    for _ in range(config.redirect_limit + 1):
        request = client.build_request("GET", current_url, headers=headers)
        if config.cookie_store:
            cookies.set_cookie_header(request)
        response = client.send(request, stream=True)
        try:
            if config.cookie_store:
                cookies.extract_cookies(response)

            if response.is_redirect:
                current_url = _redirect_target(response, current_url)
                continue

            _check_response(response)

            chunks = []
            total = 0
            for chunk in response.iter_bytes():
                total += len(chunk)
                if total > MAX_CONTENT_SIZE:
                    raise RuntimeError("Response body exceeds the maximum allowed size.")
                chunks.append(chunk)

            return _decode(response, chunks)
        finally:
            response.close()

    raise RuntimeError("Too many redirects.")


async def _fetch_async(client: httpx.AsyncClient, url: str, config: HttpConfig) -> str:
    """Async counterpart of :func:`_fetch`; raises the same exceptions."""
    _validate_url(url)

    headers = browser_headers()
    cookies = httpx.Cookies()
    current_url = url
    for _ in range(config.redirect_limit + 1):
        request = client.build_request("GET", current_url, headers=headers)
        if config.cookie_store:
            cookies.set_cookie_header(request)
        response = await client.send(request, stream=True)
        try:
            if config.cookie_store:
                cookies.extract_cookies(response)

            if response.is_redirect:
                current_url = _redirect_target(response, current_url)
                continue

            _check_response(response)

            chunks = []
            total = 0
            async for chunk in response.aiter_bytes():
                total += len(chunk)
                if total > MAX_CONTENT_SIZE:
                    raise RuntimeError("Response body exceeds the maximum allowed size.")
                chunks.append(chunk)

            return _decode(response, chunks)
        finally:
            await response.aclose()

    raise RuntimeError("Too many redirects.")


def _failure(url: str, exc: Exception) -> FetchResult:
    logger.warning("Fetcher: skipping %s – %s", url, exc)
    return FetchResult(url=url, error=f"{type(exc).__name__}: {exc}")


def _fetch_result(client: httpx.Client, url: str, config: HttpConfig) -> FetchResult:
    try:
        return FetchResult(url=url, body=_fetch(client, url, config))
    except FETCH_ERRORS as exc:
        return _failure(url, exc)


async def _fetch_result_async(
    client: httpx.AsyncClient, url: str, config: HttpConfig
) -> FetchResult:
    try:
        return FetchResult(url=url, body=await _fetch_async(client, url, config))
    except FETCH_ERRORS as exc:
        return _failure(url, exc)


async def invoke_callback(callback: Callable[..., Any], *args: Any) -> None:
    """Call *callback* and await its result when it returns an awaitable."""
    outcome = callback(*args)
    if inspect.isawaitable(outcome):
        await outcome


def fetch_url(url: str, config: Optional[HttpConfig] = None) -> str:
    """Fetch a single *url* and return its body.

    Unlike the batch functions this raises on failure (see :func:`_fetch`).
    """
    config = config or HttpConfig()
    with httpx.Client(**_client_options(config)) as client:
        return _fetch(client, url, config)


async def fetch_url_async(url: str, config: Optional[HttpConfig] = None) -> str:
    """Async variant of :func:`fetch_url`."""
    config = config or HttpConfig()
    async with httpx.AsyncClient(**_client_options(config)) as client:
        return await _fetch_async(client, url, config)


def fetch_all(urls: Sequence[str], config: Optional[HttpConfig] = None) -> List[Tuple[str, str]]:
    """Fetch *urls* one after the other and return ``(url, html)`` for each success.

    Failed URLs are logged and left out; input order is preserved.
    """
    config = config or HttpConfig()
    if not urls:
        return []

    results: List[Tuple[str, str]] = []
    with httpx.Client(**_client_options(config)) as client:
        for url in urls:
            result = _fetch_result(client, url, config)
            if result.ok:
                results.append((result.url, result.body))

    logger.info("Fetcher: %d of %d URLs fetched", len(results), len(urls))
    return results


async def fetch_all_streaming(
    urls: Sequence[str],
    config: Optional[HttpConfig],
    on_result: Callable[[Optional[FetchResult]], Any],
) -> None:
    """Fetch all *urls* concurrently, calling *on_result* once per URL as it completes.

    *on_result* receives a :class:`FetchResult` (successful or not) and may be
    a plain function or a coroutine function.  Results arrive in completion
    order.  When *urls* is empty, *on_result* is called exactly once with
    ``None``.

    An exception raised by *on_result* propagates to the caller after the
    still-running fetches are cancelled.
    """
    config = config or HttpConfig()
    if not urls:
        await invoke_callback(on_result, None)
        return

    # No pool limit: every URL is in flight at once
    async with httpx.AsyncClient(limits=_UNLIMITED_POOL, **_client_options(config)) as client:
        tasks = [asyncio.ensure_future(_fetch_result_async(client, url, config)) for url in urls]
        try:
            for completed in asyncio.as_completed(tasks):
                await invoke_callback(on_result, await completed)
        finally:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
