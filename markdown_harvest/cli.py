"""markdown-harvest CLI: print the Markdown of every page linked from a piece of text.

Usage:
    markdown-harvest "Compare https://example.com with https://example.org"
    echo "notes with links..." | markdown-harvest --stream --chunk-size 1000
"""

import asyncio
import sys
from typing import List, Optional, Union

import typer
from pydantic import ValidationError

from markdown_harvest.logging_config import configure_logging
from markdown_harvest.models.http_config import HttpConfig
from markdown_harvest.services.harvester import (
    harvest,
    harvest_chunks,
    harvest_chunks_streaming,
    harvest_streaming,
)

app = typer.Typer(
    name="markdown-harvest",
    help="Extract clean Markdown from the URLs found in a piece of text.",
    add_completion=False,
)


def _render(url: str, content: Union[str, List[str]]) -> str:
    if isinstance(content, list):
        content = "\n\n".join(
            f"--- chunk {index}/{len(content)} ---\n{chunk}"
            for index, chunk in enumerate(content, start=1)
        )
    return f"=== {url} ===\n{content}\n"


def _print_result(url: Optional[str], content: Optional[Union[str, List[str]]]) -> None:
    if url is None:
        typer.echo("No URLs found in the input text.", err=True)
    elif content is None:
        typer.echo(f"Failed to fetch {url}", err=True)
    else:
        typer.echo(_render(url, content))


def _build_config(timeout: Optional[int], max_redirect: Optional[int], cookie_store: bool) -> HttpConfig:
    builder = HttpConfig.builder().cookie_store(cookie_store)
    if timeout is not None:
        builder.timeout(timeout)
    if max_redirect is not None:
        builder.max_redirect(max_redirect)
    return builder.build()


@app.command()
def main(
    text: Optional[str] = typer.Argument(None, help="Text containing URLs. Read from stdin when omitted."),
    stream: bool = typer.Option(False, "--stream", help="Fetch concurrently and print pages as they complete."),
    chunk_size: Optional[int] = typer.Option(None, "--chunk-size", help="Split each page into chunks of this many characters."),
    chunk_overlap: Optional[int] = typer.Option(None, "--chunk-overlap", help="Characters shared by consecutive chunks."),
    timeout: Optional[int] = typer.Option(None, "--timeout", help="Per-request timeout in milliseconds."),
    max_redirect: Optional[int] = typer.Option(None, "--max-redirect", help="Maximum redirects per URL (default 2)."),
    cookie_store: bool = typer.Option(False, "--cookie-store/--no-cookie-store", help="Keep cookies across the redirects of one URL."),
    log_level: str = typer.Option("WARNING", "--log-level", help="Logging level for diagnostics on stderr."),
) -> None:
    """Harvest every URL in TEXT and print its main content as Markdown."""
    if chunk_overlap is not None and chunk_size is None:
        raise typer.BadParameter("requires --chunk-size", param_hint="'--chunk-overlap'")

    configure_logging(log_level.upper())

    if text is None:
        text = sys.stdin.read()

    try:
        config = _build_config(timeout, max_redirect, cookie_store)
    except ValidationError as exc:
        typer.echo(f"Invalid HTTP configuration: {exc}", err=True)
        raise typer.Exit(code=2)

    if stream:
        if chunk_size is None:
            asyncio.run(harvest_streaming(text, config, _print_result))
        else:
            asyncio.run(harvest_chunks_streaming(text, config, chunk_size, chunk_overlap, _print_result))
        return

    if chunk_size is None:
        records = harvest(text, config)
    else:
        records = harvest_chunks(text, config, chunk_size, chunk_overlap)

    if not records:
        typer.echo("No content harvested.", err=True)
        raise typer.Exit(code=1)

    for record in records:
        typer.echo(_render(record.url, record.content))
