"""Centralized constants for the recall application.

All magic numbers and configuration defaults live here so every layer
imports from a single source of truth.
"""

# ---------- SM-2 ----------
DEFAULT_EASE_FACTOR = 2.5
MIN_EASE_FACTOR = 1.3
DEFAULT_INTERVAL = 1
FIRST_INTERVAL = 1  # days after the first successful review
SECOND_INTERVAL = 6  # days after the second successful review
MAX_INTERVAL = 36500  # ceiling in days, about a century
PASSING_QUALITY = 3

# ---------- Quality ratings ----------
MIN_QUALITY = 0
MAX_QUALITY = 5

# ---------- Time ----------
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S.%f"

# ---------- Server ----------
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8777
