"""Summarize documentation web pages into books of chapters and pages."""

from __future__ import annotations

__version__ = "0.1.0"
