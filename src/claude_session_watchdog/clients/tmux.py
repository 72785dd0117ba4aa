"""Thin libtmux wrapper for the two operations the watchdog needs."""

import logging
from typing import Optional

import libtmux
from libtmux.exc import LibTmuxException

from claude_session_watchdog.exceptions import TmuxError

logger = logging.getLogger(__name__)


class TmuxClient:
    """Query and drive tmux sessions by name."""

    def __init__(self, server: Optional[libtmux.Server] = None):
        self._server = server

    @property
    def server(self) -> libtmux.Server:
        # Created lazily so importing this module never touches tmux
        if self._server is None:
            self._server = libtmux.Server()
        return self._server

    def session_exists(self, session_name: str) -> bool:
        """Return True if a session with exactly this name exists.

        A missing tmux binary or a dead tmux server both mean the session is gone.
        """
        try:
            return self.server.has_session(session_name, exact=True)
        except LibTmuxException as e:
            logger.debug(f"has-session failed for {session_name}: {e}")
            return False

    def send_keys(self, session_name: str, keys: str, enter: bool = True) -> None:
        """Type keys into the active pane of a session."""
        try:
            session = self.server.sessions.get(session_name=session_name, default=None)
            if session is None:
                raise TmuxError(f"Session '{session_name}' not found")
            pane = session.active_window.active_pane
            if pane is None:
                raise TmuxError(f"Session '{session_name}' has no active pane")
            pane.send_keys(keys, enter=enter)
        except LibTmuxException as e:
            raise TmuxError(f"Failed to send keys to session '{session_name}': {e}") from e


tmux_client = TmuxClient()
