"""Entry point for the cao-watchdog CLI."""

import logging
from pathlib import Path

import click

from claude_session_watchdog.cli.commands.monitor import monitor
from claude_session_watchdog.constants import LOG_FORMAT


def configure_logging(level: str, log_file=None) -> None:
    handlers = [logging.StreamHandler()]
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
    logging.basicConfig(
        level=getattr(logging, level.upper()), format=LOG_FORMAT, handlers=handlers, force=True
    )


@click.group()
@click.option(
    "--log-level",
    default="INFO",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Logging verbosity (default: INFO)",
)
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Also write logs to this file",
)
def cli(log_level, log_file):
    """Watchdog for Claude Code sessions running in tmux."""
    configure_logging(log_level, log_file)


cli.add_command(monitor)


if __name__ == "__main__":
    cli()
