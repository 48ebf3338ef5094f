"""Event model used for streaming pipeline progress.

A run produces a sequence of events, one per completed stage. The API streams them as
server-sent events; :func:`docsummarizer.orchestrator.runner.summarize` consumes them and
returns the final book.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, Field


class EventType(str, Enum):
    """High-level event categories."""

    SYSTEM = "system"
    TOOL = "tool"
    LLM = "llm"
    ERROR = "error"


class ContentType(str, Enum):
    """Semantic types within event streams."""

    MESSAGE = "message"

    RUN_STARTED = "run_started"
    DOCUMENT_EXTRACTED = "document_extracted"
    CHUNKS_COMPUTED = "chunks_computed"
    SUMMARY_DONE = "summary_done"
    BOOK_DONE = "book_done"


class RunEvent(BaseModel):
    """A single event in a run."""

    run_id: str
    seq: int = Field(ge=1)
    ts: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    event_type: EventType
    content_type: ContentType

    data: str | dict | list | None = None
    metadata: dict[str, str | int | float | bool | None] = Field(default_factory=dict)
