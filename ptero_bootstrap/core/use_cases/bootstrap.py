"""
Bootstrap use case: the linear preflight sequence.

    1. root check
    2. load settings
    3. detect OS, apply the support gate
    4. select the package manager
    5. install missing prerequisite tools (curl)
    6. fetch latest panel/wings versions

Any BootstrapError stops the sequence; it is recorded on the result
and the CLI turns it into exit status 1.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from ptero_bootstrap.adapters.packages.base import PackageManager
from ptero_bootstrap.adapters.packages.registry import get_package_manager
from ptero_bootstrap.core.config.loader import load_settings
from ptero_bootstrap.core.context import BootstrapContext
from ptero_bootstrap.core.errors import BootstrapError, UnsupportedPlatformError
from ptero_bootstrap.core.models.os_info import OSInfo
from ptero_bootstrap.core.models.settings import BootstrapSettings
from ptero_bootstrap.core.services.detection import (
    check_supported,
    detect_os,
    require_root,
)
from ptero_bootstrap.core.services.execution import command_exists
from ptero_bootstrap.core.services.releases import get_latest_versions

logger = logging.getLogger(__name__)

Reporter = Callable[[str], None]


@dataclass
class BootstrapResult:
    """Result of the bootstrap use case."""

    context: BootstrapContext | None = None
    os_info: OSInfo | None = None
    installed: list[str] | None = None
    error: str | None = None
    error_type: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict:
        if self.error:
            result: dict = {"error": self.error, "error_type": self.error_type}
            if self.os_info:
                result["os"] = self.os_info.model_dump()
            return result
        assert self.context is not None
        return {
            "os": self.context.os_info.model_dump(),
            "package_manager": self.context.package_manager.name,
            "installed": self.installed or [],
            "env": self.context.export_env(),
        }


def gate_platform(os_info: OSInfo, report: Reporter) -> None:
    """Apply the support gate, reporting the verdict either way."""
    try:
        check_supported(os_info)
    except UnsupportedPlatformError:
        report(f"{os_info.label()} is not supported")
        raise
    report(f"{os_info.label()} is supported.")


def ensure_prerequisites(
    manager: PackageManager,
    settings: BootstrapSettings,
    report: Reporter,
) -> list[str]:
    """Install any prerequisite tool that is missing from PATH.

    Returns:
        The tools that were installed (empty if all were present).
    """
    missing = [tool for tool in settings.prerequisites if not command_exists(tool)]
    if not missing:
        return []

    report(f"Installing {', '.join(missing)}...")
    manager.update_repos(quiet=settings.quiet_packages)
    manager.install_packages(missing, quiet=settings.quiet_packages)
    return missing


def run_bootstrap(
    config_path: Path | None = None,
    *,
    root: Path | str = "/",
    fetch_versions: bool = True,
    report: Reporter = logger.info,
) -> BootstrapResult:
    """Run the full preflight sequence.

    Args:
        config_path: Optional explicit path to bootstrap.yml.
        root: Filesystem root for OS probes.
        fetch_versions: Skip the GitHub lookups when False.
        report: Sink for user-facing progress lines.

    Returns:
        BootstrapResult; ``error`` is set when a step failed.
    """
    result = BootstrapResult()
    try:
        require_root()
        settings = load_settings(config_path)

        os_info = detect_os(root)
        result.os_info = os_info
        gate_platform(os_info, report)

        manager = get_package_manager(os_info, timeout=settings.command_timeout)
        ctx = BootstrapContext(os_info=os_info, settings=settings, package_manager=manager)

        result.installed = ensure_prerequisites(manager, settings, report)

        if fetch_versions:
            report("Retrieving release information...")
            ctx.versions = get_latest_versions(settings)
    except BootstrapError as e:
        logger.debug("Bootstrap stopped: %s", e)
        result.error = str(e)
        result.error_type = type(e).__name__
        return result

    result.context = ctx
    return result
