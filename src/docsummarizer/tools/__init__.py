"""Pipeline stages: fetch, parse, chunk, summarize, render, assemble."""

from __future__ import annotations

from docsummarizer.tools.book_builder import build_book, compute_book_stats
from docsummarizer.tools.chunker import chunk_text
from docsummarizer.tools.extractor import ContentExtractor
from docsummarizer.tools.markdown import MARKDOWN_PASSES, render_markdown
from docsummarizer.tools.page_fetcher import FetchedPage, PageFetcher
from docsummarizer.tools.page_parser import PageParser
from docsummarizer.tools.summarizer import Summarizer, SummaryRequest

__all__ = [
    "ContentExtractor",
    "FetchedPage",
    "MARKDOWN_PASSES",
    "PageFetcher",
    "PageParser",
    "Summarizer",
    "SummaryRequest",
    "build_book",
    "chunk_text",
    "compute_book_stats",
    "render_markdown",
]
