"""FastAPI app exposing the summarize operation, with an SSE progress stream."""

from __future__ import annotations

import json
from collections.abc import Generator
from urllib.parse import urlparse

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse, StreamingResponse
from pydantic import BaseModel, ConfigDict, Field

from docsummarizer.config import Language, Settings, load_settings
from docsummarizer.errors import DocSummarizerError, FetchError, PipelineTimeoutError
from docsummarizer.events import ContentType, EventType, RunEvent
from docsummarizer.logging import configure_logging, get_logger
from docsummarizer.models.book import BookStats, GeneratedBook
from docsummarizer.orchestrator.runner import SummarizeInputs, summarize_async, summarize_stream
from docsummarizer.tools.book_builder import compute_book_stats


class SummarizeRequest(BaseModel):
    """Summarize request. Field names follow the web client's camelCase payload."""

    model_config = ConfigDict(populate_by_name=True)

    url: str = ""
    book_name: str | None = Field(default=None, alias="bookName")
    language: Language | None = None
    model: str | None = None
    api_key: str | None = Field(default=None, alias="apiKey")


class SummarizeResponse(GeneratedBook):
    stats: BookStats


def _is_valid_url(url: str) -> bool:
    parsed = urlparse(url)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def _status_for(error: DocSummarizerError) -> int:
    if isinstance(error, PipelineTimeoutError):
        return 504
    if isinstance(error, FetchError):
        return 502
    return 500


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create FastAPI app."""

    settings = settings or load_settings()
    configure_logging(settings.log_level)
    logger = get_logger(__name__)

    app = FastAPI(title="DocSummarizer", version="0.1.0")

    @app.exception_handler(HTTPException)
    async def http_error(_: Request, exc: HTTPException) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})

    @app.exception_handler(DocSummarizerError)
    async def pipeline_error(_: Request, exc: DocSummarizerError) -> JSONResponse:
        logger.error("Summarization failed: %s", exc)
        return JSONResponse(status_code=_status_for(exc), content={"error": str(exc)})

    def validate(req: SummarizeRequest) -> SummarizeInputs:
        if not req.url:
            raise HTTPException(status_code=400, detail="URL is required")
        if not (req.api_key or settings.api_key):
            raise HTTPException(status_code=400, detail="API key is required")
        if not _is_valid_url(req.url):
            raise HTTPException(status_code=400, detail="Invalid URL")
        return SummarizeInputs(
            url=req.url,
            book_name=req.book_name,
            language=req.language,
            model=req.model,
            api_key=req.api_key,
        )

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.post("/summarize")
    async def summarize_endpoint(req: SummarizeRequest) -> SummarizeResponse:
        inputs = validate(req)
        logger.info("API summarize requested url=%s", inputs.url)
        book = await summarize_async(inputs, settings=settings)
        return SummarizeResponse(**book.model_dump(), stats=compute_book_stats(book))

    @app.post("/summarize/stream")
    def summarize_stream_endpoint(req: SummarizeRequest) -> StreamingResponse:
        inputs = validate(req)
        logger.info("API summarize stream requested url=%s", inputs.url)

        def gen() -> Generator[bytes, None, None]:
            last: RunEvent | None = None
            try:
                for ev in summarize_stream(inputs, settings=settings):
                    last = ev
                    payload = json.dumps(ev.model_dump(mode="json"), ensure_ascii=False)
                    yield f"data: {payload}\n\n".encode("utf-8")
            except DocSummarizerError as e:
                logger.error("Summarization failed: %s", e)
                error = RunEvent(
                    run_id=last.run_id if last is not None else "-",
                    seq=(last.seq + 1) if last is not None else 1,
                    event_type=EventType.ERROR,
                    content_type=ContentType.MESSAGE,
                    data=str(e),
                    metadata={"status": _status_for(e)},
                )
                payload = json.dumps(error.model_dump(mode="json"), ensure_ascii=False)
                yield f"data: {payload}\n\n".encode("utf-8")

        return StreamingResponse(gen(), media_type="text/event-stream")

    return app
