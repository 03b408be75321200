"""
CLI command for collecting the administrator's answers.

The panel installer needs database credentials, a contact email and
the initial admin account. ``collect`` asks for all of them up front,
shows a summary (passwords masked) and asks for confirmation.
"""

from __future__ import annotations

import json
import sys
from dataclasses import asdict, dataclass

import click

from ptero_bootstrap.ui.cli.output import output, print_brake
from ptero_bootstrap.ui.cli.prompts import (
    confirm_input,
    email_input,
    password_input,
    required_input,
)

# Length of the database password offered as the default
DB_PASSWORD_LENGTH = 64


@dataclass
class AdminDetails:
    """Answers collected from the administrator."""

    mysql_db: str
    mysql_user: str
    mysql_password: str
    email: str
    admin_email: str
    admin_username: str
    admin_firstname: str
    admin_lastname: str
    admin_password: str

    def to_env(self) -> dict[str, str]:
        return {key.upper(): value for key, value in asdict(self).items()}


def collect_admin_details() -> AdminDetails:
    """Run every prompt in order and return the answers."""
    from ptero_bootstrap.core.services.validation import gen_password

    output("Database configuration.", err=True)
    mysql_db = required_input("Database name (panel): ", default="panel")
    mysql_user = required_input("Database username (pterodactyl): ", default="pterodactyl")
    mysql_password = password_input(
        "Password (press enter to use randomly generated password): ",
        default=gen_password(DB_PASSWORD_LENGTH),
    )

    email = email_input(
        "Provide the email address that will be used to configure Let's Encrypt and Pterodactyl: ",
        error_message="Email cannot be empty or invalid",
    )

    output("Initial admin account.", err=True)
    admin_email = email_input(
        "Email address for the initial admin account: ",
        error_message="Email cannot be empty or invalid",
    )
    admin_username = required_input(
        "Username for the initial admin account: ",
        error_message="Username cannot be empty",
    )
    admin_firstname = required_input(
        "First name for the initial admin account: ",
        error_message="Name cannot be empty",
    )
    admin_lastname = required_input(
        "Last name for the initial admin account: ",
        error_message="Name cannot be empty",
    )
    admin_password = password_input(
        "Password for the initial admin account: ",
        error_message="Password cannot be empty",
    )

    return AdminDetails(
        mysql_db=mysql_db,
        mysql_user=mysql_user,
        mysql_password=mysql_password,
        email=email,
        admin_email=admin_email,
        admin_username=admin_username,
        admin_firstname=admin_firstname,
        admin_lastname=admin_lastname,
        admin_password=admin_password,
    )


def _summary(details: AdminDetails) -> None:
    print_brake(62, err=True)
    for key, value in asdict(details).items():
        shown = "(password hidden)" if key.endswith("password") else value
        click.echo(f"* {key.replace('_', ' ').title():<20} {shown}", err=True)
    print_brake(62, err=True)


@click.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.option("--yes", "-y", "assume_yes", is_flag=True, help="Skip the confirmation step.")
def collect(as_json: bool, assume_yes: bool) -> None:
    """Ask for database and admin account details.

    Answers are printed as shell export lines (or JSON with --json);
    prompts go to stderr so the output can be eval'd directly.
    """
    from ptero_bootstrap.core.context import render_exports

    details = collect_admin_details()
    _summary(details)

    if not assume_yes and not confirm_input("Continue with installation?", default=False):
        click.secho("Installation aborted!", fg="red", err=True)
        sys.exit(1)

    if as_json:
        click.echo(json.dumps(asdict(details), indent=2))
    else:
        click.echo(render_exports(details.to_env()))
