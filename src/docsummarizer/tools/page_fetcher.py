"""Page fetching utilities."""

from __future__ import annotations

from dataclasses import dataclass, field

import httpx

from docsummarizer.config import Settings
from docsummarizer.errors import FetchError, FetchTimeoutError
from docsummarizer.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class FetchedPage:
    """Fetched page payload."""

    url: str
    html: str
    content_type: str | None


@dataclass(frozen=True)
class PageFetcher:
    """Fetch pages over HTTP with a bounded timeout.

    ``transport`` lets tests swap in ``httpx.MockTransport``; it must support the sync or
    async client used by the caller.
    """

    settings: Settings
    transport: httpx.BaseTransport | httpx.AsyncBaseTransport | None = field(default=None, compare=False)

    @property
    def headers(self) -> dict[str, str]:
        return {
            "User-Agent": self.settings.http_user_agent,
            "Accept": self.settings.http_accept,
        }

    def fetch(self, url: str) -> FetchedPage:
        """Fetch a URL (synchronous).

        Raises:
            FetchTimeoutError: The request exceeded ``http_timeout_s``.
            FetchError: Non-success status or transport failure.
        """

        logger.info("Fetching url=%s", url)
        try:
            with httpx.Client(
                timeout=httpx.Timeout(self.settings.http_timeout_s),
                headers=self.headers,
                follow_redirects=True,
                transport=self.transport,  # type: ignore[arg-type]
            ) as client:
                resp = client.get(url)
        except httpx.TimeoutException as e:
            raise FetchTimeoutError("Request timeout", url=url) from e
        except httpx.HTTPError as e:
            raise FetchError(f"Failed to fetch URL: {e}", url=url) from e
        return self._to_page(url, resp)

    async def fetch_async(self, url: str) -> FetchedPage:
        """Async variant of :meth:`fetch`; cancelling the awaiting task aborts the request."""

        logger.info("Fetching url=%s (async)", url)
        try:
            async with httpx.AsyncClient(
                timeout=httpx.Timeout(self.settings.http_timeout_s),
                headers=self.headers,
                follow_redirects=True,
                transport=self.transport,  # type: ignore[arg-type]
            ) as client:
                resp = await client.get(url)
        except httpx.TimeoutException as e:
            raise FetchTimeoutError("Request timeout", url=url) from e
        except httpx.HTTPError as e:
            raise FetchError(f"Failed to fetch URL: {e}", url=url) from e
        return self._to_page(url, resp)

    @staticmethod
    def _to_page(url: str, resp: httpx.Response) -> FetchedPage:
        if not resp.is_success:
            raise FetchError(
                f"Failed to fetch URL: {resp.status_code} {resp.reason_phrase}".rstrip(),
                url=url,
                status_code=resp.status_code,
            )
        return FetchedPage(
            url=str(resp.url),
            html=resp.text,
            content_type=resp.headers.get("content-type"),
        )
