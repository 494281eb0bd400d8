"""Central configuration for the track overlap comparator.

All values are constants imported by the rest of the package. Each tunable can
be overridden through environment variables (optionally via a local `.env`).
"""

from __future__ import annotations

import importlib
import os


def _env_float(key: str, default: float) -> float:
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return default


def _env_int(key: str, default: int) -> int:
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _env_bool(key: str, default: bool) -> bool:
    value = os.getenv(key)
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "on"}:
        return True
    if normalized in {"0", "false", "no", "off"}:
        return False
    return default


# Load .env variables when python-dotenv is available.
_load_dotenv = None
try:
    _dotenv_mod = importlib.import_module("dotenv")
    _load_dotenv = getattr(_dotenv_mod, "load_dotenv", None)
except Exception:
    _load_dotenv = None

if callable(_load_dotenv):
    # Load .env from the current directory or any parent folder.
    _load_dotenv()


# ---------------------------------------------------------------------------
# Geodesy
# ---------------------------------------------------------------------------
# Mean Earth radius (metres) used by the haversine formula.
EARTH_RADIUS_M = 6_371_000.0


# ---------------------------------------------------------------------------
# Overlap detection
# ---------------------------------------------------------------------------
# A probe sample closer than this to the reference opens an overlap segment.
OVERLAP_ENTER_THRESHOLD_M = _env_float("OVERLAP_ENTER_THRESHOLD_M", 20.0)

# An open segment only ends once a sample drifts further than this. Keeping it
# above the enter threshold stops GPS jitter from splitting segments.
OVERLAP_EXIT_THRESHOLD_M = _env_float("OVERLAP_EXIT_THRESHOLD_M", 25.0)

# Spacing (metres) between samples taken along the probe track.
OVERLAP_RESAMPLE_STEP_M = _env_float("OVERLAP_RESAMPLE_STEP_M", 10.0)


# ---------------------------------------------------------------------------
# Performance tuning
# ---------------------------------------------------------------------------
# Threads used for the per-sample distance queries. 1 keeps everything inline.
OVERLAP_MAX_WORKERS = _env_int("OVERLAP_MAX_WORKERS", 1)

# Number of samples handed to each worker task.
OVERLAP_DISTANCE_CHUNK_SIZE = _env_int("OVERLAP_DISTANCE_CHUNK_SIZE", 256)


# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------
# Default HTML file written by the CLI when --map is given without a path.
MAP_OUTPUT_FILE = os.getenv("OVERLAP_MAP_OUTPUT_FILE", "overlap_map.html")

# Open the generated map in the default browser after writing it.
MAP_OPEN_IN_BROWSER = _env_bool("OVERLAP_MAP_OPEN_IN_BROWSER", False)

# Colours used for the first and second track, and for shared sections.
TRACK_COLORS = ["#007bff", "#dc3545"]
OVERLAP_COLOR = "#d63384"

# Decimal places shown when reporting kilometre figures.
REPORT_KM_DECIMALS = _env_int("OVERLAP_REPORT_KM_DECIMALS", 2)
