"""JSON extraction from model responses.

Models often wrap JSON in a markdown fence, with or without a ``json`` language tag.
:func:`parse_json_response` tries the fenced block first, then the whole response, and
returns a tagged result instead of raising, so each call site decides its own fallback.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import Any, Union

from docsummarizer.logging import get_logger

logger = get_logger(__name__)

_FENCE_RE = re.compile(r"```(?:json)?\s*(.*?)```", re.DOTALL | re.IGNORECASE)


@dataclass(frozen=True)
class Parsed:
    """A successfully decoded JSON value."""

    value: Any


@dataclass(frozen=True)
class Unparsed:
    """The raw response text when no JSON could be decoded."""

    raw: str


ParseResult = Union[Parsed, Unparsed]


def find_fenced_block(text: str) -> str | None:
    """Return the body of the first markdown code fence in ``text``, if any."""

    if not text:
        return None
    m = _FENCE_RE.search(text)
    if not m:
        return None
    return m.group(1).strip()


def parse_json_response(text: str) -> ParseResult:
    """Decode JSON from a model response.

    Strategy:
        1. The first fenced code block (```json ... ``` or ``` ... ```).
        2. The entire response, stripped.

    Returns:
        ``Parsed(value)`` on the first attempt that decodes, otherwise ``Unparsed(text)``.
    """

    if not text or not text.strip():
        return Unparsed(raw=text or "")

    candidates: list[str] = []
    fenced = find_fenced_block(text)
    if fenced:
        candidates.append(fenced)
    candidates.append(text.strip())

    for candidate in candidates:
        try:
            return Parsed(value=json.loads(candidate))
        except json.JSONDecodeError:
            logger.debug("parse_json_response: candidate is not valid JSON (len=%d)", len(candidate))

    return Unparsed(raw=text)


def parse_json_object(text: str) -> ParseResult:
    """Like :func:`parse_json_response`, but only a JSON object counts as parsed."""

    result = parse_json_response(text)
    if isinstance(result, Parsed) and not isinstance(result.value, dict):
        return Unparsed(raw=text)
    return result
