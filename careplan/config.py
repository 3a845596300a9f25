"""
config.py
---------
Central configuration for the careplan itinerary engine.
All values are read from environment variables with safe defaults, so the
engine runs unconfigured in tests and in the booking UI process.
"""

import os

# ── Logging ──────────────────────────────────────────────────────────────────
LOG_LEVEL: str = os.getenv("CAREPLAN_LOG_LEVEL", "WARNING").upper()

# ── Pickup Suggestions ───────────────────────────────────────────────────────
# Earliest pickup the engine will ever suggest ("HH:MM", 24-hour).
PICKUP_SUGGESTION_FLOOR: str = os.getenv("PICKUP_SUGGESTION_FLOOR", "06:00")

# Extra candidates offered around the primary suggestion [minutes].
PICKUP_OFFSETS_MINUTES: list[int] = [
    int(v) for v in os.getenv("PICKUP_OFFSETS_MINUTES", "-30,-60,-90,-120").split(",") if v.strip()
]

# ── Travel Heuristic ─────────────────────────────────────────────────────────
# Fixed travel assumption; no routing. Same address → short hop.
TRAVEL_MINUTES_SAME_ADDRESS: int      = int(os.getenv("TRAVEL_MINUTES_SAME_ADDRESS", "60"))
TRAVEL_MINUTES_DIFFERENT_ADDRESS: int = int(os.getenv("TRAVEL_MINUTES_DIFFERENT_ADDRESS", "120"))

# ── Duration Estimation ──────────────────────────────────────────────────────
MIN_SESSION_HOURS: float   = float(os.getenv("MIN_SESSION_HOURS", "0.5"))   # lower clamp
ON_SITE_WAIT_HOURS: float  = float(os.getenv("ON_SITE_WAIT_HOURS", "1.0"))  # appointment itself
HOMEWORK_HOURS: float      = float(os.getenv("HOMEWORK_HOURS", "1.0"))      # school run add-on

# ── Session Defaults ─────────────────────────────────────────────────────────
DEFAULT_START_TIME: str = os.getenv("DEFAULT_START_TIME", "09:00")

# ── Session Notes (persisted contract, do not change) ────────────────────────
NOTE_SEPARATOR: str    = "━" * 40
NOTE_EMPTY_VALUE: str  = "—"
NOTE_SAME_AS_PICKUP: str = "Same as pickup"
NOTE_BLOCK_INDENT: str = "   "
