"""State and outcome enums for the supervision loop."""

from enum import Enum


class TickState(str, Enum):
    """Classification of a single watchdog tick, in priority order."""

    SESSION_GONE = "session_gone"
    STARTING = "starting"
    COMPLETED = "completed"
    CRASHED = "crashed"
    HEALTHY = "healthy"


class WatchdogOutcome(str, Enum):
    """Terminal result of a watchdog run."""

    COMPLETED = "completed"
    SESSION_GONE = "session_gone"
    TIMED_OUT = "timed_out"
