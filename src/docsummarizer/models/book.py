"""Generated book models.

The assembled tree handed to a persistence collaborator. Every page carries both the
original markdown (``content``) and the rendered markup (``html``).
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class GeneratedPage(BaseModel):
    name: str
    content: str
    html: str


class GeneratedChapter(BaseModel):
    name: str
    pages: list[GeneratedPage] = Field(min_length=1)


class GeneratedBook(BaseModel):
    name: str
    description: str
    chapters: list[GeneratedChapter] = Field(default_factory=list)


class BookStats(BaseModel):
    """Descriptive statistics for a book; consumed by callers, not persisted."""

    total_chapters: int = Field(ge=0)
    total_pages: int = Field(ge=0)
    estimated_read_time: int = Field(ge=0, description="Minutes, at 200 words per minute.")
