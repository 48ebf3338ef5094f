"""Minimal markdown-to-HTML rendering for summary content.

Rendering is an ordered pipeline of pure ``str -> str`` passes. Order matters:

* fenced code runs before every other pass, and emits its content with newlines and
  markdown-significant characters as character references so no later pass touches it;
* inline code runs before emphasis for the same reason;
* headers go ``###`` -> ``##`` -> ``#`` so a shorter marker never eats a longer one;
* list items are tagged before runs of them are wrapped;
* paragraphs are split last, and the cleanup pass lifts block elements back out of the
  ``<p>`` wrappers the split put around them.
"""

from __future__ import annotations

import html
import re
from typing import Callable, Sequence

MarkdownPass = Callable[[str], str]

_FENCE_RE = re.compile(r"```(\w*)\n(.*?)```", re.DOTALL)
_INLINE_CODE_RE = re.compile(r"`([^`]+)`")
_H3_RE = re.compile(r"^### (.+)$", re.MULTILINE)
_H2_RE = re.compile(r"^## (.+)$", re.MULTILINE)
_H1_RE = re.compile(r"^# (.+)$", re.MULTILINE)
_BOLD_RE = re.compile(r"\*\*(.+?)\*\*")
_ITALIC_RE = re.compile(r"\*(.+?)\*")
_LIST_ITEM_RE = re.compile(r"^- (.+)$", re.MULTILINE)
_LIST_RUN_RE = re.compile(r"(?:<li>.*</li>(?:\n(?=<li>))?)+")
_BLOCKQUOTE_RE = re.compile(r"^(?:>|&gt;) (.+)$", re.MULTILINE)
_EMPTY_PARAGRAPH_RE = re.compile(r"<p>\s*</p>")
_BLOCK_IN_PARAGRAPH_RE = re.compile(
    r"\n?(<(h[1-6]|pre|ul|blockquote)\b[^>]*>.*?</\2>)\n?",
    re.DOTALL,
)

_CODE_ESCAPES = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&#039;",
    "`": "&#96;",
    "*": "&#42;",
    "\n": "&#10;",
}


def escape_code(code: str) -> str:
    """HTML-escape code and neutralize characters later passes would interpret."""

    return "".join(_CODE_ESCAPES.get(ch, ch) for ch in code)


def escape_raw_html(md: str) -> str:
    """Escape ``&``, ``<`` and ``>`` everywhere except inside fenced code blocks."""

    out: list[str] = []
    pos = 0
    for m in _FENCE_RE.finditer(md):
        out.append(html.escape(md[pos : m.start()], quote=False))
        out.append(m.group(0))
        pos = m.end()
    out.append(html.escape(md[pos:], quote=False))
    return "".join(out)


def render_code_blocks(md: str) -> str:
    def repl(m: re.Match[str]) -> str:
        lang = m.group(1) or "plaintext"
        return f'<pre><code class="language-{lang}">{escape_code(m.group(2).strip())}</code></pre>'

    return _FENCE_RE.sub(repl, md)


def render_inline_code(md: str) -> str:
    return _INLINE_CODE_RE.sub(lambda m: f"<code>{m.group(1).replace('*', '&#42;')}</code>", md)


def render_headers(md: str) -> str:
    md = _H3_RE.sub(r"<h3>\1</h3>", md)
    md = _H2_RE.sub(r"<h2>\1</h2>", md)
    return _H1_RE.sub(r"<h1>\1</h1>", md)


def render_bold(md: str) -> str:
    return _BOLD_RE.sub(r"<strong>\1</strong>", md)


def render_italic(md: str) -> str:
    return _ITALIC_RE.sub(r"<em>\1</em>", md)


def render_list_items(md: str) -> str:
    return _LIST_ITEM_RE.sub(r"<li>\1</li>", md)


def wrap_lists(md: str) -> str:
    return _LIST_RUN_RE.sub(lambda m: f"<ul>{m.group(0)}</ul>", md)


def render_blockquotes(md: str) -> str:
    return _BLOCKQUOTE_RE.sub(r"<blockquote>\1</blockquote>", md)


def render_paragraphs(md: str) -> str:
    return "<p>" + md.replace("\n\n", "</p><p>") + "</p>"


def clean_paragraphs(md: str) -> str:
    """Close paragraphs around block elements, then drop empty ``<p></p>`` wrappers."""

    md = _BLOCK_IN_PARAGRAPH_RE.sub(r"</p>\1<p>", md)
    return _EMPTY_PARAGRAPH_RE.sub("", md)


MARKDOWN_PASSES: tuple[tuple[str, MarkdownPass], ...] = (
    ("escape_raw_html", escape_raw_html),
    ("code_blocks", render_code_blocks),
    ("inline_code", render_inline_code),
    ("headers", render_headers),
    ("bold", render_bold),
    ("italic", render_italic),
    ("list_items", render_list_items),
    ("wrap_lists", wrap_lists),
    ("blockquotes", render_blockquotes),
    ("paragraphs", render_paragraphs),
    ("clean_paragraphs", clean_paragraphs),
)


def render_markdown(md: str, passes: Sequence[tuple[str, MarkdownPass]] = MARKDOWN_PASSES) -> str:
    """Render markdown to HTML by applying ``passes`` in order."""

    out = md
    for _name, fn in passes:
        out = fn(out)
    return out
