"""ID utilities."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone


def new_run_id(prefix: str = "run_") -> str:
    """Return a sortable, unique run identifier.

    Format: ``run_YYYYmmddTHHMMSS_<8 hex chars>``.
    """

    stamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%S")
    return f"{prefix}{stamp}_{uuid.uuid4().hex[:8]}"
