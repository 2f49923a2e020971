"""Global configuration and defaults for the sorter."""

from __future__ import annotations

import os
from typing import Final, Optional


def _optional_int(raw: Optional[str]) -> Optional[int]:
    if raw is None or not raw.strip():
        return None
    return int(raw)


# Rule text used when a sorter is created without rules; blank -> visible text
DEFAULT_BY: Final = os.environ.get("SORTER_DEFAULT_BY", "")
LOG_LEVEL: Final = os.environ.get("SORTER_LOG_LEVEL", "WARNING").upper()
RANDOM_SEED: Final = _optional_int(os.environ.get("SORTER_RANDOM_SEED"))
MAX_RECORDED_WARNINGS: Final = int(os.environ.get("SORTER_MAX_WARNINGS", "200"))
HTML_PARSER: Final = os.environ.get("SORTER_HTML_PARSER", "html.parser")
