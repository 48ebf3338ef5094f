"""Prompt builders for documentation summarization."""

from __future__ import annotations

from typing import Sequence

from docsummarizer.config import Language
from docsummarizer.models.document import ExtractedDocument
from docsummarizer.models.summary import ChapterSummary

LANGUAGE_INSTRUCTIONS: dict[str, str] = {
    "id": "Tulis dalam Bahasa Indonesia yang baik dan benar.",
    "en": "Write in clear English.",
}

OVERVIEW_PREVIEW_CHARS = 100


def language_instruction(language: Language) -> str:
    return LANGUAGE_INSTRUCTIONS.get(language, LANGUAGE_INSTRUCTIONS["en"])


def build_single_prompt(document: ExtractedDocument, *, language: Language, book_name: str | None) -> str:
    """Prompt asking for the whole book (title, summary, 2-5 chapters) as one JSON object."""

    title = book_name or document.title
    return f"""You are a documentation summarizer. Your task is to summarize the following documentation into a structured book format.

{language_instruction(language)}

Documentation Title: {document.title}
Source URL: {document.url}

Content:
{document.flattened_text}

Please create a summary with the following JSON structure:
{{
  "title": "{title}",
  "summary": "A brief 2-3 sentence overview of what this documentation covers",
  "chapters": [
    {{
      "title": "Chapter title",
      "content": "Chapter content as markdown (keep it concise but informative, include key concepts and examples)"
    }}
  ]
}}

Guidelines:
- Create 2-5 chapters based on the content
- Each chapter should cover a distinct topic or section
- Keep the content informative but concise
- Preserve important code examples and key concepts
- Use markdown formatting for the content

Respond with only the JSON, no additional text."""


def build_chunk_prompt(chunk: str, *, index: int, total: int, language: Language) -> str:
    """Prompt asking for one chapter (``{title, content}``) summarizing a single chunk.

    ``index`` is zero-based; ``total`` is the number of chunks the document produced.
    """

    return f"""You are a documentation summarizer. Summarize this section of documentation.

{language_instruction(language)}

Section {index + 1} of {total}:
{chunk}

Create a summary as JSON:
{{
  "title": "A descriptive title for this section",
  "content": "Summary content in markdown format"
}}

Respond with only the JSON."""


def build_overview_prompt(chapters: Sequence[ChapterSummary], *, language: Language) -> str:
    """Plain-text prompt combining per-chunk chapters into a 2-3 sentence overview."""

    previews = "\n".join(f"- {c.title}: {c.content[:OVERVIEW_PREVIEW_CHARS]}..." for c in chapters)
    return f"""{language_instruction(language)}

Based on these chapter summaries, create a brief 2-3 sentence overview:
{previews}

Respond with only the overview text, no JSON."""
