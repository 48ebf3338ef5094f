"""Tests for the HTTP surface."""

from __future__ import annotations

import functools
import json
from collections.abc import Iterator

import pytest
from fakes import ScriptedCompletions, html_transport
from fastapi.testclient import TestClient

from docsummarizer.api import app as app_module
from docsummarizer.api.app import create_app
from docsummarizer.config import Settings
from docsummarizer.errors import FetchError, FetchTimeoutError, SummarizationError
from docsummarizer.events import ContentType, EventType, RunEvent
from docsummarizer.models.book import GeneratedBook, GeneratedChapter, GeneratedPage
from docsummarizer.orchestrator import runner
from docsummarizer.orchestrator.runner import SummarizeInputs
from docsummarizer.tools.page_fetcher import PageFetcher

BOOK = GeneratedBook(
    name="Widgets",
    description="About widgets.",
    chapters=[
        GeneratedChapter(
            name="Intro",
            pages=[GeneratedPage(name="Intro", content="Hello **world**", html="<p>Hello <strong>world</strong></p>")],
        )
    ],
)


@pytest.fixture()
def client() -> TestClient:
    return TestClient(create_app(Settings(api_key=None)))


def test_health(client: TestClient) -> None:
    assert client.get("/health").json() == {"status": "ok"}


@pytest.mark.parametrize(
    ("payload", "message"),
    [
        ({"apiKey": "k"}, "URL is required"),
        ({"url": "https://example.com"}, "API key is required"),
        ({"url": "not a url", "apiKey": "k"}, "Invalid URL"),
        ({"url": "ftp://example.com/file", "apiKey": "k"}, "Invalid URL"),
    ],
)
def test_summarize_rejects_bad_input(client: TestClient, payload: dict, message: str) -> None:
    resp = client.post("/summarize", json=payload)

    assert resp.status_code == 400
    assert resp.json() == {"error": message}


def test_summarize_returns_book_with_stats(client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
    seen: list[SummarizeInputs] = []

    async def fake_summarize_async(inputs: SummarizeInputs, *, settings: Settings) -> GeneratedBook:
        seen.append(inputs)
        return BOOK

    monkeypatch.setattr(app_module, "summarize_async", fake_summarize_async)

    resp = client.post(
        "/summarize",
        json={"url": "https://example.com/docs", "bookName": "My Book", "language": "en", "apiKey": "k"},
    )

    assert resp.status_code == 200
    body = resp.json()
    assert body["name"] == "Widgets"
    assert body["chapters"][0]["pages"][0]["html"] == "<p>Hello <strong>world</strong></p>"
    assert body["stats"] == {"total_chapters": 1, "total_pages": 1, "estimated_read_time": 1}
    assert seen[0].book_name == "My Book"
    assert seen[0].language == "en"
    assert seen[0].api_key == "k"


@pytest.mark.parametrize(
    ("error", "status"),
    [
        (FetchError("Failed to fetch URL: 404 Not Found", status_code=404), 502),
        (FetchTimeoutError("Request timeout"), 504),
        (SummarizationError("Failed to parse summarization result"), 500),
    ],
)
def test_summarize_maps_pipeline_errors(
    client: TestClient,
    monkeypatch: pytest.MonkeyPatch,
    error: Exception,
    status: int,
) -> None:
    async def failing(inputs: SummarizeInputs, *, settings: Settings) -> GeneratedBook:
        raise error

    monkeypatch.setattr(app_module, "summarize_async", failing)

    resp = client.post("/summarize", json={"url": "https://example.com", "apiKey": "k"})

    assert resp.status_code == status
    assert resp.json() == {"error": str(error)}


def test_summarize_stream_emits_sse_events_and_error(client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_stream(inputs: SummarizeInputs, *, settings: Settings) -> Iterator[RunEvent]:
        yield RunEvent(
            run_id="run_x",
            seq=1,
            event_type=EventType.SYSTEM,
            content_type=ContentType.RUN_STARTED,
            data="run_started",
        )
        raise FetchError("Failed to fetch URL: 500 Internal Server Error", status_code=500)

    monkeypatch.setattr(app_module, "summarize_stream", fake_stream)

    resp = client.post("/summarize/stream", json={"url": "https://example.com", "apiKey": "k"})

    assert resp.status_code == 200
    frames = [json.loads(line[len("data: "):]) for line in resp.text.splitlines() if line.startswith("data: ")]
    assert [f["content_type"] for f in frames] == ["run_started", "message"]
    assert frames[1]["event_type"] == "error"
    assert frames[1]["seq"] == 2
    assert frames[1]["metadata"]["status"] == 502


PAGE = "<html><body><main><h1>Widgets</h1><p>Widgets are small.</p></main></body></html>"
SINGLE_SHOT = json.dumps(
    {"title": "Widgets", "summary": "About widgets.", "chapters": [{"title": "Intro", "content": "Small."}]}
)


def _use_real_runner(monkeypatch: pytest.MonkeyPatch, settings: Settings, *, page_status: int, responses: list[str]) -> None:
    monkeypatch.setattr(
        app_module,
        "summarize_stream",
        functools.partial(
            runner.summarize_stream,
            fetcher=PageFetcher(settings, transport=html_transport(PAGE, status_code=page_status)),
            llm=ScriptedCompletions(responses),
        ),
    )


def _frames(resp) -> list[dict]:
    return [json.loads(line[len("data: "):]) for line in resp.text.splitlines() if line.startswith("data: ")]


def test_summarize_stream_runs_pipeline_to_book_done(monkeypatch: pytest.MonkeyPatch) -> None:
    settings = Settings(api_key=None, default_language="en")
    _use_real_runner(monkeypatch, settings, page_status=200, responses=[SINGLE_SHOT])
    client = TestClient(create_app(settings))

    resp = client.post("/summarize/stream", json={"url": "https://example.com/docs", "apiKey": "k"})

    assert resp.status_code == 200
    frames = _frames(resp)
    assert [f["content_type"] for f in frames] == [
        "run_started",
        "document_extracted",
        "chunks_computed",
        "summary_done",
        "book_done",
    ]
    assert frames[-1]["data"]["book"]["name"] == "Widgets"
    assert frames[-1]["data"]["stats"]["total_pages"] == 1


def test_summarize_stream_reports_fetch_failure_as_error_frame(monkeypatch: pytest.MonkeyPatch) -> None:
    settings = Settings(api_key=None, default_language="en")
    _use_real_runner(monkeypatch, settings, page_status=503, responses=[])
    client = TestClient(create_app(settings))

    resp = client.post("/summarize/stream", json={"url": "https://example.com/docs", "apiKey": "k"})

    frames = _frames(resp)
    assert [f["event_type"] for f in frames] == ["system", "error"]
    assert frames[-1]["metadata"]["status"] == 502
    assert frames[-1]["data"] == "Failed to fetch URL: 503 Service Unavailable"
