"""URL -> ExtractedDocument."""

from __future__ import annotations

from dataclasses import dataclass

from docsummarizer.models.document import ExtractedDocument
from docsummarizer.tools.page_fetcher import PageFetcher
from docsummarizer.tools.page_parser import PageParser


@dataclass(frozen=True)
class ContentExtractor:
    """Fetch a page and extract its substantive content."""

    fetcher: PageFetcher
    parser: PageParser

    def extract(self, url: str) -> ExtractedDocument:
        page = self.fetcher.fetch(url)
        # Keep the requested URL; the fetched one may differ after redirects.
        return self.parser.parse_html(url, page.html)

    async def extract_async(self, url: str) -> ExtractedDocument:
        page = await self.fetcher.fetch_async(url)
        return self.parser.parse_html(url, page.html)
