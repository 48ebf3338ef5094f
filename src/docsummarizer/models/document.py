"""Extracted document models."""

from __future__ import annotations

from pydantic import BaseModel, Field


class ContentSection(BaseModel):
    """A heading-delimited unit of extracted content.

    ``content`` is a pseudo-markdown serialization (paragraphs, code fences, ``- item``
    lines, ``> quote`` lines, pipe-joined table rows). It never contains raw HTML.
    """

    heading: str
    level: int = Field(ge=1, le=6)
    content: str = ""


class ExtractedDocument(BaseModel):
    """Substantive content of a fetched web page, in source order."""

    title: str
    url: str
    sections: list[ContentSection] = Field(default_factory=list)
    flattened_text: str = ""


class TextChunk(BaseModel):
    """A zero-indexed, size-bounded slice of ``ExtractedDocument.flattened_text``."""

    index: int = Field(ge=0)
    text: str
