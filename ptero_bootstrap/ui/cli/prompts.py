"""
Interactive input collectors.

Each collector loops until it has an acceptable value and then RETURNS
it. Validation failures print an error and re-prompt; they never raise.
End of input (Ctrl-D, closed stdin) aborts via ``click.Abort``.

Prompts and masks go to stderr so stdout stays clean for
``eval "$(ptero-bootstrap collect)"``.
"""

from __future__ import annotations

import click

from ptero_bootstrap.core.services.validation import valid_email
from ptero_bootstrap.ui.cli.output import error

_BACKSPACE = ("\x7f", "\b")
_ENTER = ("\r", "\n")


def _read_line(prompt: str) -> str:
    # default="" makes click return "" on empty input instead of re-asking
    value = click.prompt(
        f"* {prompt}", default="", show_default=False, prompt_suffix="", err=True,
    )
    return value.strip()


def required_input(
    prompt: str,
    *,
    default: str | None = None,
    error_message: str = "This field is required",
) -> str:
    """Ask until a non-empty value is given.

    An empty answer takes ``default`` when one is supplied; otherwise
    ``error_message`` is shown and the question is asked again.
    """
    while True:
        value = _read_line(prompt)
        if value:
            return value
        if default:
            return default
        error(error_message)


def email_input(prompt: str, *, error_message: str = "Invalid email address") -> str:
    """Ask until an email-shaped value is given. There is no default."""
    while True:
        value = _read_line(prompt)
        if valid_email(value):
            return value
        error(error_message)


def _read_masked() -> str:
    """Read one line from the terminal, echoing ``*`` per character."""
    result = ""
    while True:
        try:
            chunk = click.getchar(echo=False)
        except EOFError:
            raise click.Abort() from None
        if not chunk:
            raise click.Abort()

        # getchar may hand back several characters at once (paste, escapes)
        for ch in chunk:
            if ch in _ENTER:
                click.echo(err=True)
                return result
            if ch in _BACKSPACE:
                if result:
                    result = result[:-1]
                    click.echo("\b \b", nl=False, err=True)
            elif ch.isprintable():
                result += ch
                click.echo("*", nl=False, err=True)


def password_input(
    prompt: str,
    *,
    default: str | None = None,
    error_message: str = "Password cannot be empty",
) -> str:
    """Ask for a password without echoing it.

    Every typed character shows as ``*``; backspace erases one. An empty
    answer takes ``default`` when supplied, otherwise the whole read
    starts over after ``error_message``.
    """
    while True:
        click.echo(f"* {prompt}", nl=False, err=True)
        value = _read_masked()
        if not value and default:
            value = default
        if value:
            return value
        error(error_message)


def confirm_input(prompt: str, *, default: bool = False) -> bool:
    """Yes/no question."""
    return click.confirm(f"* {prompt}", default=default, err=True)
