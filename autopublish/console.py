"""
Console output for CI logs.

Everything is written with click.echo so it interleaves correctly with the
output of child processes (click flushes after each write). Groups and
failures use the runner's workflow commands.
"""

from contextlib import contextmanager
from typing import Iterator

import click


def _escape_data(value: str) -> str:
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def echo(message: str = "") -> None:
    click.echo(message)


def command(cmd: str, args=()) -> None:
    """Echo a command line before it is executed."""
    click.echo(f"💲 {' '.join([cmd, *args])}")


@contextmanager
def group(title: str) -> Iterator[None]:
    """Fold everything printed inside the block under `title`."""
    click.echo(f"::group::{title}")
    try:
        yield
    finally:
        click.echo("::endgroup::")


def set_failed(message: str) -> None:
    """Mark the run as failed: an error annotation plus a stderr line."""
    click.echo(f"::error::{_escape_data(message)}")
    click.echo(message, err=True)
