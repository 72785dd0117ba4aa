"""Start-up checks on the watchdog's command-line inputs."""

import re
from pathlib import Path

from claude_session_watchdog.constants import SESSION_NAME_PATTERN
from claude_session_watchdog.exceptions import WatchdogValidationError

_SESSION_NAME_RE = re.compile(SESSION_NAME_PATTERN)


def validate_session_name(session_name: str) -> str:
    """Reject session names that could inject into tmux targets or shell commands."""
    if not _SESSION_NAME_RE.fullmatch(session_name or ""):
        raise WatchdogValidationError(
            f"Invalid session name: {session_name} "
            "(only alphanumeric, dash, underscore, dot allowed)"
        )
    return session_name


def validate_task_dir(task_dir) -> Path:
    path = Path(task_dir)
    if not path.is_dir():
        raise WatchdogValidationError(f"TASK_TMPDIR not a directory: {task_dir}")
    return path
