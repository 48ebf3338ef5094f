"""Paragraph-boundary text segmentation."""

from __future__ import annotations

import re

from docsummarizer.models.document import TextChunk

_PARAGRAPH_SPLIT_RE = re.compile(r"\n\n+")
_PARAGRAPH_SEPARATOR = "\n\n"


def split_paragraphs(text: str) -> list[str]:
    """Split on blank lines, dropping whitespace-only paragraphs."""

    return [p for p in _PARAGRAPH_SPLIT_RE.split(text) if p.strip()]


def chunk_text(text: str, chunk_size: int) -> list[TextChunk]:
    """Greedily pack paragraphs into chunks of at most ``chunk_size`` characters.

    A chunk's size is measured as its paragraphs joined by a blank line. The paragraph
    that would overflow the running chunk starts the next one. A paragraph longer than
    ``chunk_size`` is never split; it becomes its own oversized chunk.

    Never returns an empty list: text without any paragraph yields a single chunk holding
    the original text.

    Args:
        text: Flattened document text.
        chunk_size: Target maximum characters per chunk.

    Returns:
        Zero-indexed chunks in source order.
    """

    if chunk_size <= 0:
        raise ValueError("chunk_size must be positive")

    chunks: list[str] = []
    current: list[str] = []
    current_len = 0

    for para in split_paragraphs(text):
        para = para.strip()
        added = len(para) + (len(_PARAGRAPH_SEPARATOR) if current else 0)
        if current and current_len + added > chunk_size:
            chunks.append(_PARAGRAPH_SEPARATOR.join(current))
            current = [para]
            current_len = len(para)
        else:
            current.append(para)
            current_len += added

    if current:
        chunks.append(_PARAGRAPH_SEPARATOR.join(current))

    if not chunks:
        return [TextChunk(index=0, text=text)]
    return [TextChunk(index=i, text=chunk) for i, chunk in enumerate(chunks)]
