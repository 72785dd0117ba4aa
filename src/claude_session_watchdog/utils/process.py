"""Process liveness probing."""

import logging
import os

logger = logging.getLogger(__name__)


def is_process_alive(pid: int) -> bool:
    """Check whether a process exists without signalling it.

    Uses signal 0, which performs the permission and existence checks only.
    Non-positive pids address process groups and are reported as dead.
    """
    if pid <= 0:
        return False
    try:
        os.kill(pid, 0)
    except ProcessLookupError:
        return False
    except PermissionError:
        # Exists but belongs to another user
        return True
    except OSError as e:
        logger.warning(f"Liveness probe for PID {pid} failed: {e}")
        return False
    return True
