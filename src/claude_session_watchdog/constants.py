"""Constants for the Claude session watchdog.

This module defines the timing policy, task-directory file names and log
format used by the watchdog. Timing values can be overridden through
environment variables so a launcher can tune the policy without editing code.
"""

import os


def _get_float_env(name: str, default: float) -> float:
    """Parse float env var with safe fallback."""
    try:
        return float(os.getenv(name, str(default)))
    except (TypeError, ValueError):
        return default


# =============================================================================
# Session Configuration
# =============================================================================
# Session names are interpolated into tmux targets, so only a conservative
# character set is accepted
SESSION_NAME_PATTERN = r"[A-Za-z0-9._-]+"

# =============================================================================
# Task Directory Contract
# =============================================================================
# Written by the launcher wrapper; the watchdog only reads them
PID_FILE = "pid"
DONE_FILE = "done"
EXIT_CODE_FILE = "exit_code"  # Written strictly before DONE_FILE
UNKNOWN_EXIT_CODE = "unknown"

# =============================================================================
# Timing Policy (seconds)
# =============================================================================
# Poll interval while healthy; doubles on each consecutive crash
BASE_INTERVAL = _get_float_env("CAO_WATCHDOG_BASE_INTERVAL", 180)

# Wall-clock budget measured from watchdog start (5 hours)
DEADLINE_WINDOW = _get_float_env("CAO_WATCHDOG_DEADLINE", 18000)

# Wait between ticks while the pid file has not been written yet
STARTING_WAIT = _get_float_env("CAO_WATCHDOG_STARTING_WAIT", 10)

# Startup time granted to the resumed process before re-sampling
RESUME_GRACE = _get_float_env("CAO_WATCHDOG_RESUME_GRACE", 10)

# =============================================================================
# Recovery
# =============================================================================
# Continues the most recent conversation instead of starting a fresh one
RESUME_COMMAND = os.getenv("CAO_WATCHDOG_RESUME_COMMAND", "claude -c")

# =============================================================================
# Logging
# =============================================================================
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
