"""End-to-end pipeline runner.

Extract -> chunk -> summarize -> render -> assemble. Every run owns its own document,
chunks and summary; nothing is shared between runs. A failure in any stage aborts the
run and no partial book is produced.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

from docsummarizer.config import Language, Settings
from docsummarizer.events import ContentType, EventType, RunEvent
from docsummarizer.llm.client import CompletionService, OpenAICompletionClient
from docsummarizer.logging import get_logger, stage
from docsummarizer.models.book import GeneratedBook
from docsummarizer.tools.book_builder import build_book, compute_book_stats
from docsummarizer.tools.chunker import chunk_text
from docsummarizer.tools.extractor import ContentExtractor
from docsummarizer.tools.page_fetcher import PageFetcher
from docsummarizer.tools.page_parser import PageParser
from docsummarizer.tools.summarizer import Summarizer, SummaryRequest
from docsummarizer.utils.ids import new_run_id

logger = get_logger(__name__)


@dataclass(frozen=True)
class SummarizeInputs:
    """Caller-supplied parameters of a single run."""

    url: str
    book_name: str | None = None
    language: Language | None = None
    model: str | None = None
    api_key: str | None = None

    def to_request(self, settings: Settings) -> SummaryRequest:
        """Apply settings defaults.

        Raises:
            ValueError: No credential was given and none is configured.
        """

        api_key = self.api_key or settings.api_key
        if not api_key:
            raise ValueError(
                "Missing API key. Pass one with the request or set DOCSUMMARIZER_API_KEY."
            )
        return SummaryRequest(
            language=self.language or settings.default_language,
            model=self.model or settings.default_model,
            api_key=api_key,
            book_name=(self.book_name or "").strip() or None,
        )


@dataclass(frozen=True)
class _Pipeline:
    extractor: ContentExtractor
    summarizer: Summarizer


def _build_pipeline(
    settings: Settings,
    *,
    fetcher: PageFetcher | None,
    llm: CompletionService | None,
) -> _Pipeline:
    return _Pipeline(
        extractor=ContentExtractor(
            fetcher=fetcher or PageFetcher(settings),
            parser=PageParser(max_content_length=settings.max_content_length),
        ),
        summarizer=Summarizer(
            llm=llm or OpenAICompletionClient(settings),
            chunk_size=settings.chunk_size,
            max_chunks=settings.max_chunks,
        ),
    )


def summarize(
    inputs: SummarizeInputs,
    *,
    settings: Settings,
    fetcher: PageFetcher | None = None,
    llm: CompletionService | None = None,
) -> GeneratedBook:
    """Run the pipeline and return the assembled book.

    This is a convenience wrapper around :func:`summarize_stream`.
    """

    book: GeneratedBook | None = None
    for ev in summarize_stream(inputs, settings=settings, fetcher=fetcher, llm=llm):
        if ev.content_type == ContentType.BOOK_DONE and isinstance(ev.data, dict):
            book = GeneratedBook.model_validate(ev.data["book"])
    if book is None:
        raise RuntimeError("run completed without producing a book")
    return book


def summarize_stream(
    inputs: SummarizeInputs,
    *,
    settings: Settings,
    fetcher: PageFetcher | None = None,
    llm: CompletionService | None = None,
) -> Iterator[RunEvent]:
    """Run the pipeline, yielding one event per completed stage.

    The last event is ``BOOK_DONE`` carrying the book and its statistics. Closing the
    generator early abandons the run.
    """

    request = inputs.to_request(settings)
    pipeline = _build_pipeline(settings, fetcher=fetcher, llm=llm)
    run_id = new_run_id()
    seq = 0

    def emit(
        event_type: EventType,
        content_type: ContentType,
        data: str | dict | list | None = None,
        *,
        metadata: dict[str, str | int | float | bool | None] | None = None,
    ) -> RunEvent:
        nonlocal seq
        seq += 1
        return RunEvent(
            run_id=run_id,
            seq=seq,
            event_type=event_type,
            content_type=content_type,
            data=data,
            metadata=dict(metadata or {}),
        )

    with stage(run_id, "init"):
        logger.info("Run started url=%s language=%s model=%s", inputs.url, request.language, request.model)
    yield emit(
        EventType.SYSTEM,
        ContentType.RUN_STARTED,
        "run_started",
        metadata={"url": inputs.url, "language": request.language, "model": request.model},
    )

    # Each stage binds its own log context; nothing stays bound across a yield.
    with stage(run_id, "fetch"):
        document = pipeline.extractor.extract(inputs.url)
    yield emit(
        EventType.TOOL,
        ContentType.DOCUMENT_EXTRACTED,
        data={"title": document.title, "url": document.url},
        metadata={"sections": len(document.sections), "chars": len(document.flattened_text)},
    )

    with stage(run_id, "chunk"):
        chunk_count = len(chunk_text(document.flattened_text, settings.chunk_size))
    yield emit(
        EventType.SYSTEM,
        ContentType.CHUNKS_COMPUTED,
        metadata={
            "chunks": chunk_count,
            "summarized": min(chunk_count, settings.max_chunks),
            "single_shot": chunk_count == 1,
        },
    )

    with stage(run_id, "summarize"):
        summary = pipeline.summarizer.summarize(document, request)
    yield emit(
        EventType.LLM,
        ContentType.SUMMARY_DONE,
        data={"title": summary.title, "summary": summary.summary},
        metadata={"chapters": len(summary.chapters)},
    )

    with stage(run_id, "render"):
        book = build_book(summary)
        stats = compute_book_stats(book)
        logger.info(
            "Run finished chapters=%d pages=%d read_time=%dmin",
            stats.total_chapters,
            stats.total_pages,
            stats.estimated_read_time,
        )
    yield emit(
        EventType.SYSTEM,
        ContentType.BOOK_DONE,
        data={"book": book.model_dump(mode="json"), "stats": stats.model_dump(mode="json")},
    )


async def summarize_async(
    inputs: SummarizeInputs,
    *,
    settings: Settings,
    fetcher: PageFetcher | None = None,
    llm: CompletionService | None = None,
) -> GeneratedBook:
    """Async variant of :func:`summarize` on native async I/O.

    Cancelling the awaiting task aborts the in-flight fetch or model call and discards
    everything computed so far.
    """

    request = inputs.to_request(settings)
    pipeline = _build_pipeline(settings, fetcher=fetcher, llm=llm)
    run_id = new_run_id()

    with stage(run_id, "fetch"):
        logger.info("Run started (async) url=%s", inputs.url)
        document = await pipeline.extractor.extract_async(inputs.url)

    with stage(run_id, "summarize"):
        summary = await pipeline.summarizer.summarize_async(document, request)

    with stage(run_id, "render"):
        book = build_book(summary)
        logger.info("Run finished (async) chapters=%d", len(book.chapters))
    return book
