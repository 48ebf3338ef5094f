"""Logging setup for pipeline runs.

Every record carries the run id and the pipeline stage it was emitted from, so the
interleaved output of concurrent runs can be told apart::

    2026-01-01 12:00:00 INFO run=run_20260101T120000_ab12cd34 stage=fetch ...

Stage bindings live in context variables. A binding must be opened and closed within one
uninterrupted stretch of execution: a generator that yields between stages has to open a
fresh :func:`stage` for each one, because its consumer may resume it in another context.
"""

from __future__ import annotations

import contextlib
import contextvars
import logging
from collections.abc import Iterator

from rich.logging import RichHandler

NO_RUN = "-"

_run_id: contextvars.ContextVar[str] = contextvars.ContextVar("docsummarizer_run_id", default=NO_RUN)
_stage: contextvars.ContextVar[str] = contextvars.ContextVar("docsummarizer_stage", default=NO_RUN)

# Request-level chatter from the HTTP stacks; the fetcher and client log their own summary.
_QUIET_LOGGERS = ("httpx", "httpcore", "openai")

LOG_FORMAT = "%(asctime)s %(levelname)s run=%(run_id)s stage=%(stage)s %(name)s: %(message)s"


class _RunFieldsFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:  # noqa: A003
        record.run_id = _run_id.get()  # type: ignore[attr-defined]
        record.stage = _stage.get()  # type: ignore[attr-defined]
        return True


@contextlib.contextmanager
def stage(run_id: str, name: str) -> Iterator[None]:
    """Bind ``run_id`` and stage ``name`` to log records emitted inside the block."""

    run_token = _run_id.set(run_id)
    stage_token = _stage.set(name)
    try:
        yield
    finally:
        _stage.reset(stage_token)
        _run_id.reset(run_token)


def current_stage() -> tuple[str, str]:
    """Return the ``(run_id, stage)`` pair bound in the calling context."""

    return _run_id.get(), _stage.get()


def configure_logging(level: str = "INFO") -> None:
    """Install a single rich handler on the root logger.

    Safe to call repeatedly; the CLI and the API factory both call it.
    """

    root = logging.getLogger()
    root.setLevel(level)

    handler = next((h for h in root.handlers if isinstance(h, RichHandler)), None)
    if handler is None:
        handler = RichHandler(rich_tracebacks=True, show_time=False, show_path=False, markup=False)
        root.addHandler(handler)
    if not any(isinstance(f, _RunFieldsFilter) for f in handler.filters):
        handler.addFilter(_RunFieldsFilter())
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(logging.WARNING, root.level))


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
