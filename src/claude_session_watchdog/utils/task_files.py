"""Readers for the files a launcher wrapper publishes in the task directory.

Layout (all relative to the task directory):

- ``pid``: integer process id of the hosted agent
- ``exit_code``: integer exit status, written before ``done``
- ``done``: presence alone marks normal completion
"""

import logging
from pathlib import Path
from typing import Optional, Tuple

from claude_session_watchdog.constants import DONE_FILE, EXIT_CODE_FILE, PID_FILE

logger = logging.getLogger(__name__)


def _read_text(path: Path) -> Optional[str]:
    try:
        return path.read_text(encoding="utf-8").strip()
    except (OSError, UnicodeDecodeError):
        return None


def read_pid(task_dir: Path) -> Tuple[bool, Optional[int]]:
    """Read the tracked pid.

    Returns ``(recorded, pid)``. ``recorded`` is False while the file is absent,
    empty or unreadable, i.e. the wrapper has not finished publishing it.
    A recorded but non-numeric value yields ``(True, None)``.
    """
    content = _read_text(task_dir / PID_FILE)
    if not content:
        return False, None
    try:
        return True, int(content)
    except ValueError:
        logger.warning(f"Ignoring malformed pid record in {task_dir / PID_FILE}: {content!r}")
        return True, None


def is_done(task_dir: Path) -> bool:
    return (task_dir / DONE_FILE).exists()


def read_exit_code(task_dir: Path) -> Optional[int]:
    """Return the recorded exit code, or None when absent or unreadable."""
    content = _read_text(task_dir / EXIT_CODE_FILE)
    if not content:
        return None
    try:
        return int(content)
    except ValueError:
        logger.warning(f"Unreadable exit code in {task_dir / EXIT_CODE_FILE}: {content!r}")
        return None
