"""Supervision loop for a tmux-hosted Claude Code session.

Each tick samples three pieces of evidence (session existence, liveness of the
tracked pid, presence of the done marker), classifies them into a TickState and
acts on it:

- SESSION_GONE: stop, nothing can be sent to a session that no longer exists
- STARTING: pid not published yet, wait briefly and re-sample
- COMPLETED: stop and report the exit code
- CRASHED: send the resume command once, wait the grace period, re-sample
- HEALTHY: reset the retry counter and sleep the backoff interval

The done marker is checked before liveness so that a process which finished and
exited normally is never mistaken for a crash. Every sleep is clamped so the
loop cannot run past its wall-clock deadline.
"""

import logging
import math
import time
from pathlib import Path
from typing import Callable, Optional

from claude_session_watchdog.clients.tmux import TmuxClient, tmux_client
from claude_session_watchdog.exceptions import TmuxError
from claude_session_watchdog.models.state import TickState, WatchdogOutcome
from claude_session_watchdog.models.watchdog import (
    TaskEvidence,
    WatchdogConfig,
    WatchdogResult,
)
from claude_session_watchdog.utils.process import is_process_alive
from claude_session_watchdog.utils.task_files import is_done, read_exit_code, read_pid
from claude_session_watchdog.utils.validation import validate_session_name, validate_task_dir

logger = logging.getLogger(__name__)


def backoff_interval(base_interval: float, retry_count: int, limit: float = math.inf) -> float:
    """Exponential poll interval: base * 2^retry_count, capped only by limit.

    Doubling stops as soon as the interval reaches limit, so long crash runs
    never build a number too large to represent.
    """
    interval = base_interval
    for _ in range(retry_count):
        if interval >= limit:
            break
        interval *= 2
    return min(interval, limit)


def clamp_to_deadline(interval: float, now: float, deadline: float) -> float:
    """Shorten interval so that now + interval never passes the deadline."""
    return max(0.0, min(interval, deadline - now))


def classify(evidence: TaskEvidence) -> TickState:
    """Map sampled evidence to a state; earlier checks win."""
    if not evidence.session_exists:
        return TickState.SESSION_GONE
    if not evidence.pid_recorded:
        return TickState.STARTING
    if evidence.done:
        return TickState.COMPLETED
    if not evidence.pid_alive:
        return TickState.CRASHED
    return TickState.HEALTHY


class Watchdog:
    """Single-threaded watchdog for one session and its task directory."""

    def __init__(
        self,
        session_name: str,
        task_dir: Path,
        config: Optional[WatchdogConfig] = None,
        tmux: Optional[TmuxClient] = None,
        clock: Callable[[], float] = time.time,
        sleep: Callable[[float], None] = time.sleep,
        probe: Callable[[int], bool] = is_process_alive,
    ):
        self.session_name = session_name
        self.task_dir = Path(task_dir)
        self.config = config or WatchdogConfig()
        self._tmux = tmux
        self._clock = clock
        self._sleep = sleep
        self._probe = probe
        self.retry_count = 0
        self.resumes_issued = 0
        self.last_interval: Optional[float] = None

    @property
    def tmux(self) -> TmuxClient:
        return self._tmux if self._tmux is not None else tmux_client

    def sample(self) -> TaskEvidence:
        """Collect this tick's evidence, stopping at the first decisive fact."""
        if not self.tmux.session_exists(self.session_name):
            return TaskEvidence(session_exists=False)

        pid_recorded, pid = read_pid(self.task_dir)
        if not pid_recorded:
            return TaskEvidence(session_exists=True)

        if is_done(self.task_dir):
            return TaskEvidence(
                session_exists=True,
                pid_recorded=True,
                pid=pid,
                done=True,
                exit_code=read_exit_code(self.task_dir),
            )

        alive = pid is not None and self._probe(pid)
        return TaskEvidence(session_exists=True, pid_recorded=True, pid=pid, pid_alive=alive)

    def recover(self, evidence: TaskEvidence) -> None:
        """Send one resume instruction for a detected crash."""
        self.retry_count += 1
        self.resumes_issued += 1
        logger.info(
            f"Crash detected (PID {evidence.pid} gone). "
            f"Resuming Claude Code (retry #{self.retry_count})"
        )
        try:
            self.tmux.send_keys(self.session_name, self.config.resume_command)
        except TmuxError as e:
            # The next tick re-checks the session and stops if it is gone
            logger.warning(f"Resume instruction not delivered: {e}")

    def _sleep_bounded(self, seconds: float, deadline: float) -> None:
        seconds = clamp_to_deadline(seconds, self._clock(), deadline)
        if seconds > 0:
            self._sleep(seconds)

    def _result(
        self, outcome: WatchdogOutcome, start: float, exit_code: Optional[int] = None
    ) -> WatchdogResult:
        return WatchdogResult(
            outcome=outcome,
            session_name=self.session_name,
            exit_code=exit_code,
            retries=self.resumes_issued,
            elapsed_seconds=self._clock() - start,
            deadline_window=self.config.deadline_window,
        )

    def run(self) -> WatchdogResult:
        """Poll until completion, session loss or the deadline."""
        config = self.config
        start = self._clock()
        deadline = start + config.deadline_window
        logger.info(
            f"Monitoring session {self.session_name} (task dir {self.task_dir}, "
            f"base interval {config.base_interval}s, deadline in {config.deadline_window}s)"
        )

        while True:
            now = self._clock()
            if now >= deadline:
                logger.info("Retry timeout reached. Stopping monitor.")
                return self._result(WatchdogOutcome.TIMED_OUT, start)

            interval = clamp_to_deadline(
                backoff_interval(config.base_interval, self.retry_count, limit=deadline - now),
                now,
                deadline,
            )
            self.last_interval = interval

            evidence = self.sample()
            state = classify(evidence)
            logger.debug(f"Tick state={state.value} evidence={evidence.model_dump()}")

            if state == TickState.SESSION_GONE:
                logger.info(f"tmux session {self.session_name} no longer exists")
                return self._result(WatchdogOutcome.SESSION_GONE, start)

            if state == TickState.STARTING:
                logger.debug("PID file not yet written, agent still starting")
                self._sleep_bounded(config.starting_wait, deadline)
                continue

            if state == TickState.COMPLETED:
                result = self._result(WatchdogOutcome.COMPLETED, start, evidence.exit_code)
                logger.info(result.status_line())
                return result

            if state == TickState.CRASHED:
                self.recover(evidence)
                # pid file still holds the dead pid until the wrapper rewrites it
                self._sleep_bounded(config.resume_grace, deadline)
                continue

            # Interval was computed before the reset, so a recovered session
            # still waits out the escalated interval once
            self.retry_count = 0
            self._sleep_bounded(interval, deadline)


def run_watchdog(
    session_name: str,
    task_dir,
    config: Optional[WatchdogConfig] = None,
    **kwargs,
) -> WatchdogResult:
    """Validate inputs, then supervise until a terminal state is reached.

    Raises:
        WatchdogValidationError: If the session name or task directory is invalid
    """
    validate_session_name(session_name)
    path = validate_task_dir(task_dir)
    return Watchdog(session_name, path, config=config, **kwargs).run()
