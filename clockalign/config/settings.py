"""Engine-wide configuration loaded from environment variables."""

import os

from dotenv import load_dotenv

load_dotenv()

# ── Availability ─────────────────────────────────────────────────────────

# Waking/working window in local hours: start inclusive, end exclusive.
DEFAULT_WORK_START_HOUR: int = int(os.getenv("CLOCKALIGN_WORK_START_HOUR", "7"))
DEFAULT_WORK_END_HOUR: int = int(os.getenv("CLOCKALIGN_WORK_END_HOUR", "22"))

# ── Golden Windows ───────────────────────────────────────────────────────

BEST_TIMES_TOP_N: int = int(os.getenv("CLOCKALIGN_BEST_TIMES_TOP_N", "5"))
BEST_RANGE_MIN_QUALITY: int = int(os.getenv("CLOCKALIGN_BEST_RANGE_MIN_QUALITY", "50"))

# ── Sacrifice Score ──────────────────────────────────────────────────────

# A participant must hold at least this many points before an imbalance
# warning can fire for a meeting.
IMBALANCE_FLOOR_POINTS: float = float(os.getenv("CLOCKALIGN_IMBALANCE_FLOOR", "4"))
IMBALANCE_RATIO: float = float(os.getenv("CLOCKALIGN_IMBALANCE_RATIO", "2"))

HISTORY_DAYS: int = int(os.getenv("CLOCKALIGN_HISTORY_DAYS", "30"))

# ── Async Nudge ──────────────────────────────────────────────────────────

NUDGE_THRESHOLD: int = int(os.getenv("CLOCKALIGN_NUDGE_THRESHOLD", "50"))

# ── Logging ──────────────────────────────────────────────────────────────

LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
