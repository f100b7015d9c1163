# config.py
"""
Configuration settings for the scoreboard kiosk.

Plain module constants; the few values that differ per deployment can be
overridden through SCOREBOARD_* environment variables.
"""
import os

FPS = 30


def _env(name, default, cast=str):
    """Read SCOREBOARD_<name> and cast it; missing/empty/bad → *default*."""
    raw = os.environ.get(f"SCOREBOARD_{name}", "")
    if not raw:
        return default
    try:
        if cast is bool:
            return raw.strip().lower() in ("true", "1", "yes")
        return cast(raw)
    except (ValueError, TypeError):
        return default


# ── Data source ─────────────────────────────────────────────────────────────

SHEET_ID = _env("SHEET_ID", "1U42R7534pjjocbuap8JKrPvBPlY4IAs8pSsq7Whd4k4")
API_KEY  = _env("API_KEY", "")
SHEETS_BASE_URL = "https://sheets.googleapis.com/v4/spreadsheets"

# Seconds before an outstanding fetch is abandoned by the socket layer
FETCH_TIMEOUT_SEC = _env("FETCH_TIMEOUT_SEC", 10.0, float)

# ── Timers ──────────────────────────────────────────────────────────────────

POLL_INTERVAL_SEC   = _env("POLL_INTERVAL_SEC", 3.0, float)
ROTATE_INTERVAL_SEC = _env("ROTATE_INTERVAL_SEC", 10.0, float)

# Re-arm the rotation timer when the viewer navigates by hand
RESET_ROTATION_ON_NAV = _env("RESET_ROTATION_ON_NAV", False, bool)

# ── Pages ───────────────────────────────────────────────────────────────────

BRAND_BLUE  = "#0b2d71"
CORE_YELLOW = "#ffc72c"
HAR_CORAL   = "#ff6f61"

# Order here is the rotation order; the first entry is the start page.
PAGES = {
    "core": {
        "source":       "TradeshowCOREAttendance!A:D",
        "header":       "Tailgating Scoreboard",
        "display_type": "chart",
        "accent":       CORE_YELLOW,
    },
    "har": {
        "source":       "TradeshowHARAttendance!A:D",
        "header":       "Tailgating Scoreboard",
        "display_type": "chart",
        "accent":       HAR_CORAL,
    },
    "awards": {
        "source":       "Awards!A:C",
        "header":       "Tailgating Stats",
        "display_type": "list",
        "accent":       None,
    },
}

# Page the viewer can drop from the rotation ("H" key)
OPTIONAL_PAGE = "har"

# JSON file with the same shape as PAGES; replaces the table above when set
PAGES_FILE = _env("PAGES_FILE", "")

# ── Display ─────────────────────────────────────────────────────────────────

FULLSCREEN    = _env("FULLSCREEN", True, bool)
WINDOWED_SIZE = (1280, 720)

BACKGROUND = "#ffffff"
BAR_SIZE   = 34      # px, upper bound on bar thickness

# ── Remote / logging ────────────────────────────────────────────────────────

WEB_PORT  = _env("WEB_PORT", 8080, int)
LOG_LEVEL = _env("LOG_LEVEL", "INFO")
LOG_FILE  = "runtime.log"
DIAG_REFRESH_INTERVAL = 1.0
