"""Exceptions raised by the watchdog."""


class WatchdogError(Exception):
    """Base exception for watchdog errors."""

    pass


class WatchdogValidationError(WatchdogError):
    """Raised when the session name or task directory is unusable."""

    pass


class TmuxError(WatchdogError):
    """Raised when a command cannot be delivered to a tmux session."""

    pass
