"""Tests for book assembly and statistics."""

from __future__ import annotations

from docsummarizer.models.book import GeneratedBook, GeneratedChapter, GeneratedPage
from docsummarizer.models.summary import ChapterSummary, PageSummary, SummaryResult
from docsummarizer.tools.book_builder import build_book, compute_book_stats


def test_build_book_maps_title_and_summary() -> None:
    summary = SummaryResult(
        title="Widget Book",
        summary="All about widgets.",
        chapters=[ChapterSummary(title="Intro", content="# Hi\n\nSome **bold** text.")],
    )

    book = build_book(summary)

    assert book.name == "Widget Book"
    assert book.description == "All about widgets."
    assert len(book.chapters) == 1


def test_chapter_without_pages_becomes_single_page() -> None:
    summary = SummaryResult(chapters=[ChapterSummary(title="Intro", content="# Hi\n\nSome **bold** text.")])

    chapter = build_book(summary).chapters[0]

    assert chapter.name == "Intro"
    assert len(chapter.pages) == 1
    page = chapter.pages[0]
    assert page.name == "Intro"
    assert page.content == "# Hi\n\nSome **bold** text."
    assert page.html == "<h1>Hi</h1><p>Some <strong>bold</strong> text.</p>"


def test_untitled_chapter_is_numbered() -> None:
    summary = SummaryResult(chapters=[ChapterSummary(title="A", content="a"), ChapterSummary(content="b")])

    chapters = build_book(summary).chapters

    assert [c.name for c in chapters] == ["A", "Chapter 2"]
    assert chapters[1].pages[0].name == "Chapter 2"


def test_explicit_pages_render_one_page_each() -> None:
    summary = SummaryResult(
        chapters=[
            ChapterSummary(
                title="Guide",
                content="ignored when pages exist",
                pages=[
                    PageSummary(title="Setup", content="Run `make`."),
                    PageSummary(title="Use", content="- a\n- b"),
                    PageSummary(content="untitled"),
                ],
            )
        ]
    )

    pages = build_book(summary).chapters[0].pages

    assert [p.name for p in pages] == ["Setup", "Use", "Page 3"]
    assert all(p.html for p in pages)
    assert pages[0].html == "<p>Run <code>make</code>.</p>"
    assert pages[1].html == "<ul><li>a</li>\n<li>b</li></ul>"


def test_empty_pages_list_still_yields_one_page() -> None:
    summary = SummaryResult(chapters=[ChapterSummary(title="Solo", content="text", pages=[])])

    chapter = build_book(summary).chapters[0]

    assert [p.name for p in chapter.pages] == ["Solo"]


def test_compute_book_stats_counts_words_over_raw_markdown() -> None:
    book = GeneratedBook(
        name="b",
        description="d",
        chapters=[
            GeneratedChapter(name="c1", pages=[GeneratedPage(name="p1", content="word " * 150, html="")]),
            GeneratedChapter(
                name="c2",
                pages=[
                    GeneratedPage(name="p2", content="word " * 100, html=""),
                    GeneratedPage(name="p3", content="", html=""),
                ],
            ),
        ],
    )

    stats = compute_book_stats(book)

    assert stats.total_chapters == 2
    assert stats.total_pages == 3
    # 250 words at 200 wpm rounds up to 2 minutes.
    assert stats.estimated_read_time == 2


def test_compute_book_stats_empty_book() -> None:
    stats = compute_book_stats(GeneratedBook(name="b", description="d"))
    assert (stats.total_chapters, stats.total_pages, stats.estimated_read_time) == (0, 0, 0)


def test_whitespace_only_page_content_is_stored_empty() -> None:
    chapter = ChapterSummary(
        title="Notes",
        content="ignored",
        pages=[PageSummary(title="Blank", content="  \n\n "), PageSummary(title="Text", content="Hi")],
    )

    pages = build_book(SummaryResult(title="T", summary="S", chapters=[chapter])).chapters[0].pages

    assert [(p.content, p.html) for p in pages] == [("", ""), ("Hi", "<p>Hi</p>")]
    assert all(p.html for p in pages if p.content)
