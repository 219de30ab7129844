"""
Constants for the Referee Sideline Assistant.

This module contains configuration constants used throughout the application.
"""

# Application metadata
APP_TITLE = "REFY Sideline Assistant"

# Match timing defaults (seconds)
DEFAULT_HALF_DURATION = 45 * 60
DEFAULT_EXTRA_HALF_DURATION = 15 * 60
DEFAULT_QUICK_EXTRA_TIME = (2 * 60, 3 * 60, 4 * 60)
REGULATION_HALVES = 2
MAX_HALVES = 4

# Upper bound for any entered duration (extra time or an extended half)
MAX_DURATION_SECONDS = 100 * 60
MAX_SECONDS_COMPONENT = 59

# Friendly labels for each half (used for UI hints)
HALF_LABELS = {
    1: "First Half",
    2: "Second Half",
    3: "Extra Half 1",
    4: "Extra Half 2",
}

# Fired once when the countdown naturally reaches zero
VIBRATION_PATTERN = [200, 100, 200, 100, 200]

# Key-value store keys
CURRENT_MATCH_KEY = "currentMatch"
MATCH_HISTORY_KEY = "matchHistory"
SETTINGS_KEY = "appSettings"

THEMES = ("light", "dark")
