"""Centralized constants for the lexis scheduling engine.

All magic numbers and configuration defaults live here so every layer
imports from a single source of truth.
"""

# ---------- Ease factor ----------
INITIAL_EASE_FACTOR = 2.5
MIN_EASE_FACTOR = 1.3
MAX_EASE_FACTOR = 2.5
FAILURE_EASE_PENALTY = 0.2

# ---------- Quality ratings ----------
MIN_QUALITY = 0
MAX_QUALITY = 5
SUCCESS_QUALITY = 3  # ratings at or above this count as a successful recall

# ---------- Intervals (days) ----------
FIRST_INTERVAL = 1
SECOND_INTERVAL = 6
RELEARN_INTERVAL = 1

# ---------- Mastery tiers ----------
# (min repetitions, max repetitions, min ease). None means unbounded.
FAMILIAR_TIER = (3, 5, 2.0)
PROFICIENT_TIER = (6, 10, 2.2)
MASTERED_TIER = (11, None, 2.4)

# ---------- Weak cards ----------
DEFAULT_WEAK_EASE_THRESHOLD = 2.0
DEFAULT_WEAK_ACCURACY_THRESHOLD = 60.0

# ---------- Dates ----------
# Components that cannot be parsed fall back to these values.
FALLBACK_YEAR = 2024
FALLBACK_MONTH = 1
FALLBACK_DAY = 1
DATE_FORMAT = "%Y-%m-%d"

# ---------- Sessions ----------
DEFAULT_SESSION_LIMIT = 20
