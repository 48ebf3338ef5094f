"""Page parsing utilities.

Turns fetched HTML into heading-delimited sections of pseudo-markdown text. The output is
lossy on purpose: it keeps what a summarizer needs (headings, prose, code, list items,
quotes, table cells) and nothing else.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import PreformattedString

from docsummarizer.logging import get_logger
from docsummarizer.models.document import ContentSection, ExtractedDocument

logger = get_logger(__name__)

# Removed before anything else is looked at.
NON_CONTENT_SELECTOR = (
    "script, style, nav, header, footer, aside, .sidebar, .navigation, .menu, "
    ".ad, .advertisement, .cookie-banner, .popup"
)

# First match wins; falls back to <body>.
MAIN_CONTENT_SELECTORS: tuple[str, ...] = (
    "main",
    "article",
    ".content",
    ".main-content",
    ".post-content",
    ".article-content",
    ".documentation",
    ".docs-content",
    "#content",
    "#main",
)

HEADING_TAGS = ("h1", "h2", "h3", "h4", "h5", "h6")
BLOCK_TAGS = HEADING_TAGS + ("p", "pre", "code", "ul", "ol", "blockquote", "table")
# Elements whose text is separated from its neighbours when flattened to one line.
TEXT_BREAK_TAGS = frozenset(
    HEADING_TAGS
    + ("p", "pre", "ul", "ol", "li", "blockquote", "table", "tr", "th", "td", "div", "br", "dt", "dd")
)

DEFAULT_TITLE = "Untitled Document"
INTRODUCTION_HEADING = "Introduction"
TRUNCATION_MARKER = "\n\n[Content truncated...]"


def _text_runs(el: Tag) -> Iterator[str]:
    for child in el.children:
        if isinstance(child, Tag):
            breaks = child.name in TEXT_BREAK_TAGS
            if breaks:
                yield " "
            yield from _text_runs(child)
            if breaks:
                yield " "
        elif isinstance(child, NavigableString) and not isinstance(child, PreformattedString):
            yield str(child)


def _inline_text(el: Tag) -> str:
    """Whitespace-collapsed text of ``el``; block-level children never run together."""

    return " ".join("".join(_text_runs(el)).split())


@dataclass
class _SectionBuilder:
    heading: str
    level: int
    parts: list[str] = field(default_factory=list)

    @property
    def content(self) -> str:
        return "".join(self.parts)

    def has_content(self) -> bool:
        return bool(self.content.strip())

    def build(self) -> ContentSection:
        return ContentSection(heading=self.heading, level=self.level, content=self.content)


class PageParser:
    """Parse fetched HTML pages into an :class:`ExtractedDocument`."""

    def __init__(self, *, max_content_length: int = 100_000) -> None:
        self._max_content_length = max_content_length

    def parse_html(self, url: str, html: str) -> ExtractedDocument:
        """Parse HTML into ordered sections and a flattened, length-capped text."""

        soup = BeautifulSoup(html, "lxml")
        self._strip_non_content(soup)

        root = self._select_content_root(soup)
        title = self._extract_title(soup)
        sections = self._extract_sections(root) if root is not None else []
        flattened = self.truncate(self.flatten(sections), max_chars=self._max_content_length)

        logger.info(
            "Parsed url=%s title=%r sections=%d chars=%d",
            url,
            title,
            len(sections),
            len(flattened),
        )
        return ExtractedDocument(title=title, url=url, sections=sections, flattened_text=flattened)

    @staticmethod
    def _strip_non_content(soup: BeautifulSoup) -> None:
        for el in soup.select(NON_CONTENT_SELECTOR):
            # Descendants of an already removed element are gone with it.
            if not el.decomposed:
                el.decompose()

    @staticmethod
    def _select_content_root(soup: BeautifulSoup) -> Tag | None:
        for selector in MAIN_CONTENT_SELECTORS:
            el = soup.select_one(selector)
            if el is not None:
                return el
        return soup.body or soup

    @staticmethod
    def _extract_title(soup: BeautifulSoup) -> str:
        h1 = soup.find("h1")
        if h1 is not None:
            text = _inline_text(h1)
            if text:
                return text
        if soup.title is not None:
            text = _inline_text(soup.title)
            if text:
                return text
        return DEFAULT_TITLE

    def _extract_sections(self, root: Tag) -> list[ContentSection]:
        blocks = root.find_all(list(BLOCK_TAGS))
        # A container holding a heading is walked through instead of serialized whole,
        # so the heading still opens its own section.
        covering_ids = {
            id(el) for el in blocks if el.name in HEADING_TAGS or el.find(list(HEADING_TAGS)) is None
        }

        sections: list[ContentSection] = []
        current: _SectionBuilder | None = None

        for el in blocks:
            if id(el) not in covering_ids:
                continue
            # Nested matches (code in pre, p in blockquote, lists in lists) are
            # already covered by their outermost block.
            if any(id(parent) in covering_ids for parent in el.parents):
                continue

            if el.name in HEADING_TAGS:
                if current is not None and current.has_content():
                    sections.append(current.build())
                current = _SectionBuilder(heading=_inline_text(el), level=int(el.name[1]))
                continue

            text = self._serialize_block(el)
            if not text:
                continue
            if current is None:
                current = _SectionBuilder(heading=INTRODUCTION_HEADING, level=1)
            current.parts.append(text)

        if current is not None and current.has_content():
            sections.append(current.build())
        return sections

    @staticmethod
    def _serialize_block(el: Tag) -> str:
        """Serialize a non-heading block; returns "" for blocks without text."""

        name = el.name
        if name in ("pre", "code"):
            code = el.get_text().strip()
            return f"\n```\n{code}\n```\n" if code else ""

        if name in ("ul", "ol"):
            items = [_inline_text(li) for li in el.find_all("li")]
            items = [item for item in items if item]
            if not items:
                return ""
            return "".join(f"\n- {item}" for item in items) + "\n"

        if name == "blockquote":
            text = _inline_text(el)
            return f"\n> {text}\n" if text else ""

        if name == "table":
            rows: list[str] = []
            for tr in el.find_all("tr"):
                cells = [_inline_text(cell) for cell in tr.find_all(["th", "td"])]
                if any(cells):
                    rows.append(" | ".join(cells) + "\n")
            if not rows:
                return ""
            return "\n[Table content]\n" + "".join(rows)

        text = _inline_text(el)
        return f"\n{text}" if text else ""

    @staticmethod
    def flatten(sections: list[ContentSection]) -> str:
        """Join sections as ``## heading`` blocks separated by blank lines."""

        return "\n\n".join(f"## {s.heading}\n{s.content}" for s in sections)

    @staticmethod
    def truncate(text: str, *, max_chars: int) -> str:
        """Cap ``text`` at ``max_chars`` and append :data:`TRUNCATION_MARKER` when cut."""

        if len(text) <= max_chars:
            return text
        return text[:max_chars] + TRUNCATION_MARKER
