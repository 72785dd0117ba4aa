"""Monitor command: supervise a tmux session until it completes."""

import click
from pydantic import ValidationError

from claude_session_watchdog.constants import (
    BASE_INTERVAL,
    DEADLINE_WINDOW,
    RESUME_COMMAND,
    RESUME_GRACE,
    STARTING_WAIT,
)
from claude_session_watchdog.exceptions import WatchdogValidationError
from claude_session_watchdog.models.watchdog import WatchdogConfig
from claude_session_watchdog.services.watchdog_service import run_watchdog

MONITOR_USAGE = "cao-watchdog monitor <tmux-session> <task-tmpdir>"


@click.command()
@click.argument("session", required=False)
@click.argument("task_dir", required=False)
@click.option(
    "--base-interval",
    type=float,
    default=BASE_INTERVAL,
    show_default=True,
    help="Seconds between polls while healthy; doubles per consecutive crash",
)
@click.option(
    "--deadline",
    type=float,
    default=DEADLINE_WINDOW,
    show_default=True,
    help="Wall-clock budget in seconds, measured from watchdog start",
)
@click.option(
    "--starting-wait",
    type=float,
    default=STARTING_WAIT,
    show_default=True,
    help="Seconds to wait while the pid file has not been written",
)
@click.option(
    "--resume-grace",
    type=float,
    default=RESUME_GRACE,
    show_default=True,
    help="Seconds to wait after sending the resume command",
)
@click.option(
    "--resume-command",
    default=RESUME_COMMAND,
    show_default=True,
    help="Command typed into the session to resume after a crash",
)
def monitor(session, task_dir, base_interval, deadline, starting_wait, resume_grace, resume_command):
    """Monitor a Claude Code session running in tmux.

    Detects completion via TASK_DIR/done and crashes via liveness of the pid in
    TASK_DIR/pid, resuming crashed sessions with the resume command.

    \b
    SESSION   Name of the tmux session (e.g. claude-refactor-auth)
    TASK_DIR  The task's temp directory holding pid, done and exit_code
    """
    if not session or not task_dir:
        raise click.ClickException(f"Usage: {MONITOR_USAGE}")

    try:
        config = WatchdogConfig(
            base_interval=base_interval,
            deadline_window=deadline,
            starting_wait=starting_wait,
            resume_grace=resume_grace,
            resume_command=resume_command,
        )
    except ValidationError as e:
        raise click.ClickException(f"Invalid watchdog configuration: {e}")

    try:
        result = run_watchdog(session, task_dir, config)
    except WatchdogValidationError as e:
        raise click.ClickException(str(e))

    click.echo(result.status_line())
