"""Tests for page fetching."""

from __future__ import annotations

import asyncio

import httpx
import pytest
from fakes import html_transport, recording_transport

from docsummarizer.config import Settings
from docsummarizer.errors import FetchError, FetchTimeoutError, PipelineTimeoutError
from docsummarizer.tools.page_fetcher import PageFetcher


def test_fetch_returns_html_and_sends_identifying_headers() -> None:
    seen: list[httpx.Request] = []
    transport = recording_transport(lambda req: httpx.Response(200, text="<p>hi</p>"), seen)
    fetcher = PageFetcher(Settings(), transport=transport)

    page = fetcher.fetch("https://example.com/docs")

    assert page.html == "<p>hi</p>"
    assert page.url == "https://example.com/docs"
    assert seen[0].headers["User-Agent"] == "Mozilla/5.0 (compatible; DocSummarizer/1.0)"
    assert seen[0].headers["Accept"].startswith("text/html")


def test_fetch_non_success_status_raises_fetch_error() -> None:
    fetcher = PageFetcher(Settings(), transport=html_transport("gone", status_code=404))

    with pytest.raises(FetchError) as excinfo:
        fetcher.fetch("https://example.com/missing")

    assert excinfo.value.status_code == 404
    assert "404" in str(excinfo.value)
    assert not isinstance(excinfo.value, FetchTimeoutError)


def test_fetch_timeout_raises_timeout_subtype() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    fetcher = PageFetcher(Settings(), transport=httpx.MockTransport(handler))

    with pytest.raises(FetchTimeoutError) as excinfo:
        fetcher.fetch("https://example.com/slow")

    assert isinstance(excinfo.value, FetchError)
    assert isinstance(excinfo.value, PipelineTimeoutError)
    assert isinstance(excinfo.value, TimeoutError)


def test_fetch_transport_failure_raises_fetch_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    fetcher = PageFetcher(Settings(), transport=httpx.MockTransport(handler))

    with pytest.raises(FetchError):
        fetcher.fetch("https://example.com")


def test_fetch_async_matches_sync_behaviour() -> None:
    fetcher = PageFetcher(Settings(), transport=html_transport("<h1>Async</h1>"))
    page = asyncio.run(fetcher.fetch_async("https://example.com"))
    assert page.html == "<h1>Async</h1>"

    failing = PageFetcher(Settings(), transport=html_transport("boom", status_code=500))
    with pytest.raises(FetchError):
        asyncio.run(failing.fetch_async("https://example.com"))
