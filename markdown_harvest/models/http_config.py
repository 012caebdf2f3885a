from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

# Redirect cap applied when the caller does not set one
DEFAULT_MAX_REDIRECTS = 2


class HttpConfig(BaseModel):
    """Immutable per-call HTTP policy shared by every fetch of a harvest."""

    model_config = ConfigDict(frozen=True)

    timeout: Optional[int] = Field(
        default=None,
        ge=1,
        description="Per-request timeout in milliseconds. None uses the transport default.",
    )
    max_redirect: Optional[int] = Field(
        default=None,
        ge=0,
        description=f"Maximum redirect hops per fetch. None means {DEFAULT_MAX_REDIRECTS}.",
    )
    cookie_store: bool = Field(
        default=False,
        description="Keep cookies set by a response for the following redirect hops of the same fetch.",
    )

    @classmethod
    def builder(cls) -> "HttpConfigBuilder":
        return HttpConfigBuilder()

    @property
    def timeout_seconds(self) -> Optional[float]:
        return self.timeout / 1000 if self.timeout is not None else None

    @property
    def redirect_limit(self) -> int:
        return self.max_redirect if self.max_redirect is not None else DEFAULT_MAX_REDIRECTS


class HttpConfigBuilder:
    """Fluent builder for :class:`HttpConfig`.

    Example::

        config = HttpConfig.builder().timeout(30_000).max_redirect(3).cookie_store(True).build()
    """

    def __init__(self) -> None:
        self._timeout: Optional[int] = None
        self._max_redirect: Optional[int] = None
        self._cookie_store = False

    def timeout(self, ms: int) -> "HttpConfigBuilder":
        self._timeout = ms
        return self

    def max_redirect(self, max_redirect: int) -> "HttpConfigBuilder":
        self._max_redirect = max_redirect
        return self

    def cookie_store(self, cookie_store: bool) -> "HttpConfigBuilder":
        self._cookie_store = cookie_store
        return self

    def build(self) -> HttpConfig:
        """Return the configured :class:`HttpConfig`.

        Raises:
            pydantic.ValidationError: if a value is out of range (e.g. a
                non-positive timeout or a negative redirect cap).
        """
        return HttpConfig(
            timeout=self._timeout,
            max_redirect=self._max_redirect,
            cookie_store=self._cookie_store,
        )
