"""
Console output helpers: the ``* ...`` status line format.

Status and warnings go to stdout unless ``err`` is set; errors always
go to stderr. Colors are handled by click, which strips them when the
stream is not a terminal.
"""

from __future__ import annotations

import click


def output(message: str, *, err: bool = False) -> None:
    """Plain status line."""
    click.echo(f"* {message}", err=err)


def error(message: str) -> None:
    """Labeled, red ERROR block on stderr."""
    click.echo(err=True)
    click.echo("* " + click.style("ERROR", fg="red") + f": {message}", err=True)
    click.echo(err=True)


def warning(message: str, *, err: bool = False) -> None:
    """Labeled, yellow WARNING block."""
    click.echo(err=err)
    click.echo("* " + click.style("WARNING", fg="yellow", bold=True) + f": {message}", err=err)
    click.echo(err=err)


def print_brake(width: int, *, err: bool = False) -> None:
    """Horizontal rule of ``#``."""
    click.echo("#" * width, err=err)


def hyperlink(url: str) -> str:
    """OSC 8 terminal hyperlink whose text is the URL itself."""
    return f"\033]8;;{url}\a{url}\033]8;;\a"
