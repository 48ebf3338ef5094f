"""Uvicorn server launcher.

Console scripts must point to a callable, not an ASGI app object.
"""

from __future__ import annotations

from typing import Annotated

import typer
import uvicorn


def main(
    host: Annotated[str, typer.Option(help="Bind host")] = "0.0.0.0",
    port: Annotated[int, typer.Option(help="Bind port")] = 8000,
    reload: Annotated[bool, typer.Option(help="Enable auto-reload (dev)")] = False,
) -> None:
    """Start the DocSummarizer API server."""

    uvicorn.run(
        "docsummarizer.api.app:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
        log_level="info",
    )


def cli() -> None:
    typer.run(main)


if __name__ == "__main__":
    cli()
