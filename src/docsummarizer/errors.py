"""Error taxonomy for the summarization pipeline.

Extraction, completion and single-shot summarization failures abort a run. Per-chunk
parse failures in the multi-chunk path never surface here; they are absorbed by the
summarizer.
"""

from __future__ import annotations


class DocSummarizerError(RuntimeError):
    """Base class for all pipeline failures."""


class PipelineTimeoutError(DocSummarizerError, TimeoutError):
    """An outbound call (page fetch or model call) exceeded its deadline."""


class FetchError(DocSummarizerError):
    """The target page could not be fetched."""

    def __init__(self, message: str, *, url: str | None = None, status_code: int | None = None) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class FetchTimeoutError(FetchError, PipelineTimeoutError):
    pass


class CompletionError(DocSummarizerError):
    """The text-completion service rejected or failed a call."""


class CompletionTimeoutError(CompletionError, PipelineTimeoutError):
    pass


class SummarizationError(DocSummarizerError):
    """The single-shot summary could not be parsed from the model output."""

    def __init__(self, message: str, *, raw: str | None = None) -> None:
        super().__init__(message)
        self.raw = raw
