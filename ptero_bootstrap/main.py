"""
ptero-bootstrap: CLI entrypoint.

Usage:
    ptero-bootstrap --help
    ptero-bootstrap detect
    ptero-bootstrap bootstrap --export      # eval "$(ptero-bootstrap bootstrap --export)"
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click

from ptero_bootstrap import __version__
from ptero_bootstrap.core.observability.logging_config import resolve_level, setup_logging
from ptero_bootstrap.ui.cli.output import error, hyperlink, output, warning

# Architectures wings publishes binaries for
_WINGS_ARCHES = ("amd64", "arm64")


@click.group()
@click.version_option(version=__version__, prog_name="ptero-bootstrap")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to bootstrap.yml (default: auto-detect).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """ptero-bootstrap: prepare a Linux host for the panel and wings installers."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["debug"] = debug
    ctx.obj["config_path"] = Path(config_path) if config_path else None
    ctx.obj.setdefault("root", Path("/"))

    setup_logging(
        level=resolve_level(debug=debug, verbose=verbose, quiet=quiet),
        log_file=os.environ.get("PB_LOG_FILE"),
        log_file_level=os.environ.get("PB_LOG_FILE_LEVEL"),
    )


@cli.command()
@click.option("--export", "as_export", is_flag=True, help="Print shell export lines for eval.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.option("--skip-versions", is_flag=True, help="Don't query GitHub for release tags.")
@click.pass_context
def bootstrap(ctx: click.Context, as_export: bool, as_json: bool, skip_versions: bool) -> None:
    """Check the host, install prerequisites and resolve versions."""
    from ptero_bootstrap.core.context import render_exports
    from ptero_bootstrap.core.use_cases.bootstrap import run_bootstrap

    # Keep stdout clean for eval / json consumers
    machine_output = as_export or as_json
    report = (lambda msg: click.echo(f"* {msg}", err=True)) if machine_output else output

    result = run_bootstrap(
        config_path=ctx.obj.get("config_path"),
        root=ctx.obj["root"],
        fetch_versions=not skip_versions,
        report=report,
    )

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.ok else 1)

    if not result.ok:
        error(result.error or "Bootstrap failed")
        sys.exit(1)

    assert result.context is not None  # guaranteed when ok
    env = result.context.export_env()

    arch = result.context.os_info.release_arch
    if arch not in _WINGS_ARCHES:
        warning(f"No wings binary is published for {arch}; only the panel can be installed.",
                err=machine_output)

    if as_export:
        click.echo(render_exports(env))
        return

    if not ctx.obj.get("quiet"):
        click.echo()
        for key, value in env.items():
            click.echo(f"   {key:<26} {value}")
        click.echo()


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def detect(ctx: click.Context, as_json: bool) -> None:
    """Show the detected OS and whether it is supported (no root needed)."""
    from ptero_bootstrap.adapters.packages import get_package_manager
    from ptero_bootstrap.core.services.detection import detect_os, is_supported

    info = detect_os(ctx.obj["root"])
    supported = is_supported(info)
    manager = get_package_manager(info) if info.family else None

    if as_json:
        click.echo(json.dumps({
            **info.model_dump(),
            "family": info.family,
            "package_manager": manager.name if manager else None,
            "package_manager_available": manager.is_available() if manager else False,
            "supported": supported,
        }, indent=2))
        sys.exit(0 if supported else 1)

    click.secho(f"🖥️  {info.label()}", fg="cyan", bold=True)
    click.echo(f"   Major version: {info.version_major}")
    click.echo(f"   Architecture:  {info.cpu_architecture}")
    click.echo(f"   Detected via:  {info.source}")
    if manager:
        icon = "✅" if manager.is_available() else "❌"
        click.echo(f"   Packages:      {icon} {manager.name}")
    if supported:
        click.secho("   ✅ Supported", fg="green")
    else:
        click.secho("   ❌ Not supported", fg="red")
        sys.exit(1)


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def versions(ctx: click.Context, as_json: bool) -> None:
    """Show the latest panel and wings release tags."""
    from ptero_bootstrap.core.config.loader import load_settings
    from ptero_bootstrap.core.errors import BootstrapError
    from ptero_bootstrap.core.services.releases import get_latest_versions

    try:
        settings = load_settings(ctx.obj.get("config_path"))
        latest = get_latest_versions(settings)
    except BootstrapError as e:
        if as_json:
            click.echo(json.dumps({"error": str(e)}, indent=2))
        else:
            error(str(e))
        sys.exit(1)

    if as_json:
        click.echo(json.dumps(latest.to_dict(), indent=2))
        return

    for label, project, tag in (
        ("panel", settings.panel_project, latest.panel),
        ("wings", settings.wings_project, latest.wings),
    ):
        url = f"https://github.com/{project}/releases/tag/{tag}"
        click.echo(f"   {label}  {tag:<10} {hyperlink(url)}")


# ── Sub-groups ──────────────────────────────────────────────────

from ptero_bootstrap.ui.cli.admin import collect  # noqa: E402
from ptero_bootstrap.ui.cli.packages import packages  # noqa: E402
from ptero_bootstrap.ui.cli.util import util  # noqa: E402

cli.add_command(collect)
cli.add_command(packages)
cli.add_command(util)


if __name__ == "__main__":
    cli()
