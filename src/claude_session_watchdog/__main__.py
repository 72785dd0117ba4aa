from claude_session_watchdog.cli.main import cli

if __name__ == "__main__":
    cli()
