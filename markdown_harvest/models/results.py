from typing import List, NamedTuple, Optional, Union


class FetchResult(NamedTuple):
    """Outcome of fetching one URL: exactly one of *body* / *error* is set."""

    url: str
    body: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.body is not None


class HarvestRecord(NamedTuple):
    """One successfully processed URL and its Markdown (or Markdown chunks)."""

    url: str
    content: Union[str, List[str]]
