"""Assemble a summary into a book -> chapters -> pages tree."""

from __future__ import annotations

import math

from docsummarizer.models.book import BookStats, GeneratedBook, GeneratedChapter, GeneratedPage
from docsummarizer.models.summary import ChapterSummary, SummaryResult
from docsummarizer.tools.markdown import render_markdown

WORDS_PER_MINUTE = 200


def build_book(summary: SummaryResult) -> GeneratedBook:
    """Map a summary to a book, rendering every page's markdown.

    A chapter without explicit pages becomes a single page named after the chapter.
    """

    chapters = [_build_chapter(chapter, index) for index, chapter in enumerate(summary.chapters)]
    return GeneratedBook(name=summary.title, description=summary.summary, chapters=chapters)


def _build_chapter(chapter: ChapterSummary, index: int) -> GeneratedChapter:
    name = chapter.title or f"Chapter {index + 1}"
    if chapter.pages:
        pages = [
            _build_page(page.title or f"Page {page_index + 1}", page.content)
            for page_index, page in enumerate(chapter.pages)
        ]
    else:
        pages = [_build_page(name, chapter.content)]
    return GeneratedChapter(name=name, pages=pages)


def _build_page(name: str, content: str) -> GeneratedPage:
    # Whitespace-only content renders to nothing, so it is stored as empty.
    if not content.strip():
        content = ""
    return GeneratedPage(name=name, content=content, html=render_markdown(content))


def count_words(text: str) -> int:
    return len(text.split())


def compute_book_stats(book: GeneratedBook) -> BookStats:
    """Chapter count, page count and read time (``ceil(words / 200)`` minutes)."""

    pages = [page for chapter in book.chapters for page in chapter.pages]
    total_words = sum(count_words(page.content) for page in pages)
    return BookStats(
        total_chapters=len(book.chapters),
        total_pages=len(pages),
        estimated_read_time=math.ceil(total_words / WORDS_PER_MINUTE),
    )
