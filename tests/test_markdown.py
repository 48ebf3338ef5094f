"""Tests for the markdown rendering passes.

Each pass is tested on the input it sees inside the pipeline, which pins the order the
passes must run in.
"""

from __future__ import annotations

from docsummarizer.tools.markdown import (
    MARKDOWN_PASSES,
    clean_paragraphs,
    escape_raw_html,
    render_blockquotes,
    render_bold,
    render_code_blocks,
    render_headers,
    render_inline_code,
    render_italic,
    render_list_items,
    render_markdown,
    render_paragraphs,
    wrap_lists,
)


def test_title_and_bold_scenario() -> None:
    assert render_markdown("# Title\n\nSome **bold** text.") == "<h1>Title</h1><p>Some <strong>bold</strong> text.</p>"


def test_render_markdown_is_idempotent_per_input() -> None:
    md = "## Setup\n\n- one\n- two\n\n```py\nprint('x')\n```\n\n> note"
    assert render_markdown(md) == render_markdown(md)


def test_pass_order() -> None:
    assert [name for name, _ in MARKDOWN_PASSES] == [
        "escape_raw_html",
        "code_blocks",
        "inline_code",
        "headers",
        "bold",
        "italic",
        "list_items",
        "wrap_lists",
        "blockquotes",
        "paragraphs",
        "clean_paragraphs",
    ]


def test_escape_raw_html_leaves_fenced_code_alone() -> None:
    md = "a <b> & c\n```\n<raw>\n```"
    assert escape_raw_html(md) == "a &lt;b&gt; &amp; c\n```\n<raw>\n```"


def test_code_blocks_escape_content_and_tag_language() -> None:
    out = render_code_blocks("```python\nif a < b:\n    print('hi')\n```")
    assert out == (
        '<pre><code class="language-python">'
        "if a &lt; b:&#10;    print(&#039;hi&#039;)"
        "</code></pre>"
    )


def test_code_blocks_default_language_is_plaintext() -> None:
    assert render_code_blocks("```\nx\n```") == '<pre><code class="language-plaintext">x</code></pre>'


def test_code_block_content_survives_later_passes() -> None:
    """Code runs first so emphasis, headers and lists never reach into it."""

    html = render_markdown("```\n# not a header\n- not a list\n**not bold**\n\nstill code\n```")
    assert html.startswith('<pre><code class="language-plaintext">')
    assert "<h1>" not in html
    assert "<li>" not in html
    assert "<strong>" not in html
    assert "<p>" not in html


def test_inline_code_before_emphasis() -> None:
    assert render_inline_code("use `a*b*c` here") == "use <code>a&#42;b&#42;c</code> here"
    assert "<em>" not in render_markdown("use `a*b*c` here")


def test_headers_most_specific_first() -> None:
    assert render_headers("### Three\n## Two\n# One") == "<h3>Three</h3>\n<h2>Two</h2>\n<h1>One</h1>"


def test_bold_before_italic() -> None:
    assert render_italic(render_bold("**b** and *i*")) == "<strong>b</strong> and <em>i</em>"
    # Italic first would leave stray asterisks around an <em>.
    assert render_bold(render_italic("**b**")) != "<strong>b</strong>"


def test_list_items_then_wrapping() -> None:
    tagged = render_list_items("- one\n- two\n\ntext")
    assert tagged == "<li>one</li>\n<li>two</li>\n\ntext"
    assert wrap_lists(tagged) == "<ul><li>one</li>\n<li>two</li></ul>\n\ntext"


def test_separate_lists_are_wrapped_separately() -> None:
    out = wrap_lists("<li>a</li>\n\nmid\n\n<li>b</li>")
    assert out == "<ul><li>a</li></ul>\n\nmid\n\n<ul><li>b</li></ul>"


def test_blockquotes_match_escaped_marker() -> None:
    assert render_blockquotes("&gt; quoted") == "<blockquote>quoted</blockquote>"
    assert render_markdown("> quoted") == "<blockquote>quoted</blockquote>"


def test_paragraphs_split_on_blank_lines() -> None:
    assert render_paragraphs("a\n\nb") == "<p>a</p><p>b</p>"


def test_clean_paragraphs_unnests_blocks_and_drops_empty() -> None:
    raw = "<p><h2>H</h2></p><p></p><p>text</p><p><ul><li>x</li></ul></p>"
    assert clean_paragraphs(raw) == "<h2>H</h2><p>text</p><ul><li>x</li></ul>"


def test_block_followed_by_text_on_next_line() -> None:
    assert render_markdown("# Title\nBody line") == "<h1>Title</h1><p>Body line</p>"


def test_full_document() -> None:
    md = "## Install\n\nRun `pip install x`.\n\n- fast\n- *small*\n\n> tip\n\nDone."
    assert render_markdown(md) == (
        "<h2>Install</h2>"
        "<p>Run <code>pip install x</code>.</p>"
        "<ul><li>fast</li>\n<li><em>small</em></li></ul>"
        "<blockquote>tip</blockquote>"
        "<p>Done.</p>"
    )
