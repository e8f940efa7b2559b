"""
HerdTag - Centralised configuration.

All tunables live here.  Every other module imports from config
instead of reading os.environ directly.
"""

from __future__ import annotations
import os
from pathlib import Path


# ── Paths ──────────────────────────────────────────────────────────────
BASE_DIR = Path(__file__).resolve().parent

# ── Database ───────────────────────────────────────────────────────────
DB_URL = os.environ.get("HERDTAG_DB", f"sqlite:///{BASE_DIR / 'herdtag.sqlite'}")

# ── Server ─────────────────────────────────────────────────────────────
HOST   = os.environ.get("HERDTAG_HOST", "0.0.0.0")
PORT   = int(os.environ.get("HERDTAG_PORT", "5000"))
DEBUG  = os.environ.get("HERDTAG_DEBUG", "0") == "1"
SECRET = os.environ.get("HERDTAG_SECRET", "herdtag-dev-key-change-in-prod")

# ── Logging ────────────────────────────────────────────────────────────
LOG_LEVEL  = os.environ.get("HERDTAG_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

# ── Tag generation ─────────────────────────────────────────────────────
DEFAULT_TAG_PREFIX       = "COW"
MAX_ALTERNATIVE_ATTEMPTS = 10
PREVIEW_DEFAULT_COUNT    = 3
PREVIEW_MAX_COUNT        = 50
SEQUENCE_CAS_RETRIES     = 20     # compare-and-swap rounds per increment

# ── Pagination ─────────────────────────────────────────────────────────
API_MAX_LIMIT     = 1000
API_DEFAULT_LIMIT = 100
