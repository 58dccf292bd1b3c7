"""
Configuration for the Film Explorer dashboard.
Paths, fallback ranges, chart layout and timing constants.
"""

import os  # environment overrides
from pathlib import Path  # filesystem-safe paths

# ---------------------------------------------------------------------------
# Paths (override with FILM_EXPLORER_DATA_PATH)
# ---------------------------------------------------------------------------
PROJECT_ROOT = Path(__file__).resolve().parents[1]  # repository root
DATA_PATH = Path(os.environ.get("FILM_EXPLORER_DATA_PATH", str(PROJECT_ROOT / "data" / "ghibli.csv")))

# ---------------------------------------------------------------------------
# Dataset defaults
# ---------------------------------------------------------------------------
# Used to seed the year range controls when no record carries a usable year
DEFAULT_YEAR_BOUNDS = (1980, 2025)

# Sentinel director value meaning "no director filter"
ALL_DIRECTORS = "ALL"

# ---------------------------------------------------------------------------
# Chart layout
# ---------------------------------------------------------------------------
CHART_DEFAULT_WIDTH = 960  # used when the container width is unknown
CHART_HEIGHT = 450
CHART_MARGINS = {"top": 18, "right": 26, "bottom": 50, "left": 60}
AXIS_TICKS = 7

# Point opacity: no brush / inside brush / outside brush
OPACITY_DEFAULT = 0.9
OPACITY_SELECTED = 0.95
OPACITY_DIMMED = 0.25

# ---------------------------------------------------------------------------
# Behaviour
# ---------------------------------------------------------------------------
RESIZE_DEBOUNCE_SECONDS = float(os.environ.get("FILM_EXPLORER_DEBOUNCE_MS", "80")) / 1000.0
TABLE_ROW_LIMIT = 30  # rows shown in the results table
