"""Summary models produced by the summarizer."""

from __future__ import annotations

from pydantic import BaseModel, Field


class PageSummary(BaseModel):
    title: str = ""
    content: str = ""


class ChapterSummary(BaseModel):
    """A chapter of the summary. ``content`` is markdown."""

    title: str = ""
    content: str
    pages: list[PageSummary] | None = None


class SummaryResult(BaseModel):
    """Terminal output of the summarizer, independent of how many model calls produced it."""

    title: str = ""
    summary: str = ""
    chapters: list[ChapterSummary] = Field(default_factory=list)
