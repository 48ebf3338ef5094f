from __future__ import annotations

from docsummarizer.prompts.summarizer import (
    LANGUAGE_INSTRUCTIONS,
    build_chunk_prompt,
    build_overview_prompt,
    build_single_prompt,
)

__all__ = [
    "LANGUAGE_INSTRUCTIONS",
    "build_single_prompt",
    "build_chunk_prompt",
    "build_overview_prompt",
]
