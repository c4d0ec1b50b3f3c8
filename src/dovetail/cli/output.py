"""Output routing for CLI commands.

user_output() is for humans and goes to stderr; machine_output() is for data
(JSON, bare values) and goes to stdout so it can be piped.
"""

import click
from rich.console import Console


def user_output(message: str = "") -> None:
    click.echo(message, err=True)


def machine_output(message: str) -> None:
    click.echo(message)


def error_text(message: str) -> str:
    return click.style("Error: ", fg="red") + message


def stderr_console() -> Console:
    """Console for tables; resolves sys.stderr at print time."""
    return Console(stderr=True, width=200)
