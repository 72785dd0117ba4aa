"""Pydantic models for watchdog configuration, evidence and results."""

from typing import Optional

from pydantic import BaseModel, Field

from claude_session_watchdog.constants import (
    BASE_INTERVAL,
    DEADLINE_WINDOW,
    RESUME_COMMAND,
    RESUME_GRACE,
    STARTING_WAIT,
    UNKNOWN_EXIT_CODE,
)
from claude_session_watchdog.models.state import WatchdogOutcome


def format_duration(seconds: float) -> str:
    """Render a duration compactly, e.g. 18000 -> '5h', 90 -> '1m30s'."""
    total = int(seconds)
    hours, rest = divmod(total, 3600)
    minutes, secs = divmod(rest, 60)
    parts = []
    if hours:
        parts.append(f"{hours}h")
    if minutes:
        parts.append(f"{minutes}m")
    if secs or not parts:
        parts.append(f"{secs}s")
    return "".join(parts)


class WatchdogConfig(BaseModel):
    """Timing and recovery policy for one watchdog run."""

    base_interval: float = Field(default=BASE_INTERVAL, gt=0)
    deadline_window: float = Field(default=DEADLINE_WINDOW, gt=0)
    starting_wait: float = Field(default=STARTING_WAIT, gt=0)
    resume_grace: float = Field(default=RESUME_GRACE, ge=0)
    resume_command: str = Field(default=RESUME_COMMAND, min_length=1)


class TaskEvidence(BaseModel):
    """External facts sampled on one tick."""

    session_exists: bool
    pid_recorded: bool = False
    pid: Optional[int] = None
    pid_alive: bool = False
    done: bool = False
    exit_code: Optional[int] = None


class WatchdogResult(BaseModel):
    """What the watchdog reports when its loop terminates."""

    outcome: WatchdogOutcome
    session_name: str
    exit_code: Optional[int] = None
    retries: int = 0
    elapsed_seconds: float = 0.0
    deadline_window: float = DEADLINE_WINDOW

    def status_line(self) -> str:
        if self.outcome == WatchdogOutcome.COMPLETED:
            code = UNKNOWN_EXIT_CODE if self.exit_code is None else self.exit_code
            return f"Task completed with exit code: {code}"
        if self.outcome == WatchdogOutcome.SESSION_GONE:
            return f"tmux session {self.session_name} no longer exists. Stopping monitor."
        return (
            f"Retry timeout reached ({format_duration(self.deadline_window)} wall-clock). "
            "Stopping monitor."
        )
