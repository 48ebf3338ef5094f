"""Documentation summarization.

Two strategies, chosen by how many chunks the document produces:

* single-shot: one prompt returns the whole summary as JSON; a parse failure is fatal.
* multi-chunk: one prompt per chunk (strictly sequential, capped at ``max_chunks``), then
  one plain-text overview prompt. A chunk whose response cannot be parsed is replaced
  by a degraded chapter built from the raw chunk text.
"""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import ValidationError

from docsummarizer.config import Language
from docsummarizer.errors import SummarizationError
from docsummarizer.llm.client import CompletionService
from docsummarizer.logging import get_logger
from docsummarizer.models.document import ExtractedDocument, TextChunk
from docsummarizer.models.summary import ChapterSummary, SummaryResult
from docsummarizer.prompts import build_chunk_prompt, build_overview_prompt, build_single_prompt
from docsummarizer.tools.chunker import chunk_text
from docsummarizer.utils.json_extract import Parsed, parse_json_object

logger = get_logger(__name__)

FALLBACK_PREVIEW_CHARS = 500
FALLBACK_OVERVIEW = "A comprehensive summary of the documentation."


@dataclass(frozen=True)
class SummaryRequest:
    """Per-run summarization parameters."""

    language: Language
    model: str
    api_key: str
    book_name: str | None = None


@dataclass(frozen=True)
class Summarizer:
    """Drive a text-completion service to summarize an extracted document."""

    llm: CompletionService
    chunk_size: int = 8000
    max_chunks: int = 10

    def summarize(self, document: ExtractedDocument, request: SummaryRequest) -> SummaryResult:
        """Summarize a document into a title, an overview and chapters.

        Raises:
            SummarizationError: The single-shot response could not be parsed.
            CompletionError: A model call failed (never retried).
        """

        chunks = chunk_text(document.flattened_text, self.chunk_size)
        if len(chunks) == 1:
            logger.info("Summarizing in a single call (chars=%d)", len(document.flattened_text))
            prompt = build_single_prompt(document, language=request.language, book_name=request.book_name)
            raw = self.llm.complete(prompt, model=request.model, api_key=request.api_key)
            return self._single_result(raw, document, request)

        selected = self._select_chunks(chunks)
        chapters: list[ChapterSummary] = []
        for chunk in selected:
            prompt = build_chunk_prompt(chunk.text, index=chunk.index, total=len(chunks), language=request.language)
            raw = self.llm.complete(prompt, model=request.model, api_key=request.api_key)
            chapters.append(self._chunk_chapter(raw, chunk))

        overview_prompt = build_overview_prompt(chapters, language=request.language)
        overview = self.llm.complete(overview_prompt, model=request.model, api_key=request.api_key)
        return self._multi_result(overview, chapters, document, request)

    async def summarize_async(self, document: ExtractedDocument, request: SummaryRequest) -> SummaryResult:
        """Async variant of :meth:`summarize`.

        Chunk calls are still awaited one after another, preserving chapter order.
        """

        chunks = chunk_text(document.flattened_text, self.chunk_size)
        if len(chunks) == 1:
            logger.info("Summarizing in a single call (chars=%d)", len(document.flattened_text))
            prompt = build_single_prompt(document, language=request.language, book_name=request.book_name)
            raw = await self.llm.complete_async(prompt, model=request.model, api_key=request.api_key)
            return self._single_result(raw, document, request)

        selected = self._select_chunks(chunks)
        chapters: list[ChapterSummary] = []
        for chunk in selected:
            prompt = build_chunk_prompt(chunk.text, index=chunk.index, total=len(chunks), language=request.language)
            raw = await self.llm.complete_async(prompt, model=request.model, api_key=request.api_key)
            chapters.append(self._chunk_chapter(raw, chunk))

        overview_prompt = build_overview_prompt(chapters, language=request.language)
        overview = await self.llm.complete_async(overview_prompt, model=request.model, api_key=request.api_key)
        return self._multi_result(overview, chapters, document, request)

    def _select_chunks(self, chunks: list[TextChunk]) -> list[TextChunk]:
        if len(chunks) > self.max_chunks:
            logger.info(
                "Document produced %d chunks; summarizing the first %d and dropping %d",
                len(chunks),
                self.max_chunks,
                len(chunks) - self.max_chunks,
            )
        else:
            logger.info("Summarizing %d chunks", len(chunks))
        return chunks[: self.max_chunks]

    @staticmethod
    def _single_result(raw: str, document: ExtractedDocument, request: SummaryRequest) -> SummaryResult:
        parsed = parse_json_object(raw)
        if not isinstance(parsed, Parsed):
            logger.error("Failed to parse single-shot summary. Raw=%s", raw[:400])
            raise SummarizationError("Failed to parse summarization result", raw=raw)
        try:
            result = SummaryResult.model_validate(parsed.value)
        except ValidationError as e:
            logger.error("Single-shot summary has an unexpected shape: %s", e)
            raise SummarizationError("Failed to parse summarization result", raw=raw) from e

        title = request.book_name or result.title or document.title
        return result.model_copy(update={"title": title})

    @staticmethod
    def _chunk_chapter(raw: str, chunk: TextChunk) -> ChapterSummary:
        parsed = parse_json_object(raw)
        if isinstance(parsed, Parsed):
            try:
                return ChapterSummary.model_validate(parsed.value)
            except ValidationError:
                logger.warning("Chunk %d summary has an unexpected shape. Raw=%s", chunk.index + 1, raw[:400])
        else:
            logger.warning("Failed to parse chunk %d summary. Raw=%s", chunk.index + 1, raw[:400])
        return degraded_chapter(chunk)

    @staticmethod
    def _multi_result(
        overview: str,
        chapters: list[ChapterSummary],
        document: ExtractedDocument,
        request: SummaryRequest,
    ) -> SummaryResult:
        summary = overview.strip()
        if not summary:
            logger.warning("Overview call returned no text; using fallback overview")
            summary = FALLBACK_OVERVIEW
        return SummaryResult(
            title=request.book_name or document.title,
            summary=summary,
            chapters=chapters,
        )


def degraded_chapter(chunk: TextChunk) -> ChapterSummary:
    """Chapter substituted for a chunk whose model response could not be used."""

    return ChapterSummary(
        title=f"Section {chunk.index + 1}",
        content=chunk.text[:FALLBACK_PREVIEW_CHARS] + "...",
    )
