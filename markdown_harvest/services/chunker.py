import logging
from typing import List, Optional

from langchain_text_splitters import MarkdownTextSplitter

logger = logging.getLogger(__name__)


def validate_chunk_params(chunk_size: int, chunk_overlap: Optional[int] = None) -> bool:
    """Return True when *chunk_size* / *chunk_overlap* can be used; log a warning otherwise."""
    if chunk_size <= 0:
        logger.warning("Invalid chunk_size %d: must be greater than 0", chunk_size)
        return False
    if chunk_overlap is not None:
        if chunk_overlap < 0:
            logger.warning("Invalid chunk_overlap %d: must not be negative", chunk_overlap)
            return False
        if chunk_overlap >= chunk_size:
            logger.warning(
                "chunk_overlap (%d) must be less than chunk_size (%d); returning no chunks",
                chunk_overlap,
                chunk_size,
            )
            return False
    return True


def split_markdown(
    markdown: str,
    chunk_size: int,
    chunk_overlap: Optional[int] = None,
) -> List[str]:
    """Split *markdown* into ordered, overlapping chunks.

    Args:
        markdown:      Cleaned Markdown for one page.
        chunk_size:    Target maximum chunk length in characters.  A chunk may
                       exceed it when a single unsplittable unit is longer.
        chunk_overlap: Characters shared between consecutive chunks
                       (default: no overlap).  Must be less than *chunk_size*.

    Returns:
        The list of chunks, or ``[]`` for blank input or invalid parameters.
    """
    if not validate_chunk_params(chunk_size, chunk_overlap):
        return []
    if not markdown.strip():
        return []

    splitter = MarkdownTextSplitter(chunk_size=chunk_size, chunk_overlap=chunk_overlap or 0)
    return [chunk for chunk in splitter.split_text(markdown) if chunk.strip()]
