"""Global configuration and constants for the legends dashboard."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Final

PACKAGE_DATA_FILE: Final = str(Path(__file__).resolve().parent.parent / "gui" / "resources" / "data.json")
DATA_URL: Final = os.environ.get("LEGENDS_DATA_URL", PACKAGE_DATA_FILE)
DEFAULT_USER_AGENT: Final = "LegendsDashboard/1.0 (+https://github.com/)"
DEFAULT_TIMEOUT: Final = 15  # seconds

# Shown to the user for any transport or parse failure; raw detail goes to the log.
LOAD_ERROR_MESSAGE: Final = "Unable to load rider data. Please refresh to try again."
LOADING_LABEL: Final = "Loading…"

# Fraction of a metric card that must be on screen before its chart is built.
LAZY_VISIBILITY_THRESHOLD: Final = 0.1
LOADING_INDICATOR_DELAY_MS: Final = 500

WINDOW_SUBTITLE: Final = "Comparing Two Cycling Legends Across Generations"
FOOTER_LINES: Final = (
    "Data accurate as of Nov 2025 | Pogačar's statistics are still being written!",
    "Note: Different eras had different racing calendars and competition levels",
)

LOG_LEVEL: Final = os.environ.get("LEGENDS_LOG_LEVEL", "INFO")
