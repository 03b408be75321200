"""
CLI commands for the native package manager.

Thin wrappers over ``ptero_bootstrap.adapters.packages``. Both commands
need root and a supported OS, exactly like ``bootstrap``.
"""

from __future__ import annotations

import sys

import click

from ptero_bootstrap.ui.cli.output import error, output


def _resolve_manager(ctx: click.Context):
    """Root check → settings → detect → gate → package manager."""
    from ptero_bootstrap.adapters.packages import get_package_manager
    from ptero_bootstrap.core.config.loader import load_settings
    from ptero_bootstrap.core.services.detection import (
        check_supported,
        detect_os,
        require_root,
    )

    require_root()
    settings = load_settings(ctx.obj.get("config_path"))
    info = detect_os(ctx.obj["root"])
    check_supported(info)
    return get_package_manager(info, timeout=settings.command_timeout)


@click.group()
def packages() -> None:
    """Packages: refresh metadata and install through apt/dnf/yum."""


@packages.command()
@click.option("--quiet-pm", is_flag=True, help="Pass quiet flags to the package manager.")
@click.pass_context
def update(ctx: click.Context, quiet_pm: bool) -> None:
    """Refresh repository metadata (no-op on RPM distributions)."""
    from ptero_bootstrap.core.errors import BootstrapError

    try:
        manager = _resolve_manager(ctx)
        manager.update_repos(quiet=quiet_pm)
    except BootstrapError as e:
        error(str(e))
        sys.exit(1)
    output(f"Repositories refreshed ({manager.name})")


@packages.command()
@click.argument("names", nargs=-1, required=True)
@click.option("--quiet-pm", is_flag=True, help="Pass quiet flags to the package manager.")
@click.option("--no-update", is_flag=True, help="Skip the metadata refresh.")
@click.pass_context
def install(ctx: click.Context, names: tuple[str, ...], quiet_pm: bool, no_update: bool) -> None:
    """Install one or more packages (version pins allowed, e.g. nginx=1.18*)."""
    from ptero_bootstrap.core.errors import BootstrapError

    try:
        manager = _resolve_manager(ctx)
        if not no_update:
            manager.update_repos(quiet=quiet_pm)
        output(f"Installing {' '.join(names)}...")
        manager.install_packages(list(names), quiet=quiet_pm)
    except BootstrapError as e:
        error(str(e))
        sys.exit(1)
    click.secho(f"✅ Installed via {manager.name}", fg="green")
