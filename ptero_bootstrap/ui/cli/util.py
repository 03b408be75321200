"""
CLI commands for the standalone helpers.

These are what the shell install scripts call into:

    ptero-bootstrap util password --length 64
    ptero-bootstrap util email admin@example.com || echo invalid
"""

from __future__ import annotations

import sys

import click


@click.group()
def util() -> None:
    """Helpers: passwords, email and IP checks."""


@util.command()
@click.option("--length", "-l", type=click.IntRange(min=1), default=64, show_default=True)
def password(length: int) -> None:
    """Print a random password."""
    from ptero_bootstrap.core.services.validation import gen_password

    click.echo(gen_password(length))


@util.command()
@click.argument("address")
def email(address: str) -> None:
    """Exit 0 if ADDRESS is a valid email, 1 otherwise."""
    from ptero_bootstrap.core.services.validation import valid_email

    if valid_email(address):
        click.echo("valid")
        return
    click.echo("invalid")
    sys.exit(1)


@util.command()
@click.argument("address")
def ip(address: str) -> None:
    """Exit 0 if the kernel has a route to ADDRESS, 1 otherwise."""
    from ptero_bootstrap.core.services.validation import is_routable_ip

    if is_routable_ip(address):
        click.echo("routable")
        return
    click.echo("unroutable")
    sys.exit(1)
