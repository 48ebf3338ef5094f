"""Pydantic models used across the project."""

from __future__ import annotations

from docsummarizer.models.book import BookStats, GeneratedBook, GeneratedChapter, GeneratedPage
from docsummarizer.models.document import ContentSection, ExtractedDocument, TextChunk
from docsummarizer.models.summary import ChapterSummary, PageSummary, SummaryResult

__all__ = [
    "BookStats",
    "ChapterSummary",
    "ContentSection",
    "ExtractedDocument",
    "GeneratedBook",
    "GeneratedChapter",
    "GeneratedPage",
    "PageSummary",
    "SummaryResult",
    "TextChunk",
]
