"""Watchdog that keeps a tmux-hosted Claude Code session running until it finishes."""
