"""
Bootstrap context: everything later steps need, built once at startup.

Replaces process-global OS/version variables: the CLI constructs one
BootstrapContext after detection and hands it to whatever needs the
OS triple, the settings, the package manager or the fetched versions.
"""

from __future__ import annotations

import shlex
from dataclasses import dataclass

from ptero_bootstrap.adapters.packages.base import PackageManager
from ptero_bootstrap.core.models.os_info import OSInfo
from ptero_bootstrap.core.models.settings import BootstrapSettings
from ptero_bootstrap.core.services.releases import ReleaseVersions


@dataclass
class BootstrapContext:
    """Explicit startup state passed to every component."""

    os_info: OSInfo
    settings: BootstrapSettings
    package_manager: PackageManager
    versions: ReleaseVersions | None = None

    def export_env(self) -> dict[str, str]:
        """Variables consumed by the panel/wings install scripts."""
        s = self.settings
        env = {
            "GITHUB_SOURCE": s.github_source,
            "SCRIPT_RELEASE": s.script_release,
            "GITHUB_BASE_URL": s.github_base_url,
            "PANEL_DL_URL": s.panel_dl_url,
            "WINGS_DL_BASE_URL": s.wings_dl_base_url,
            "WINGS_DL_URL": s.wings_dl_url(self.os_info.release_arch),
            "OS": self.os_info.name,
            "OS_VER": self.os_info.version,
            "OS_VER_MAJOR": self.os_info.version_major,
            "CPU_ARCHITECTURE": self.os_info.cpu_architecture,
        }
        if self.versions is not None:
            env["PTERODACTYL_PANEL_VERSION"] = self.versions.panel
            env["PTERODACTYL_WINGS_VERSION"] = self.versions.wings
        return env


def render_exports(env: dict[str, str]) -> str:
    """``export KEY='value'`` lines, safe for ``eval "$(...)"``."""
    return "\n".join(f"export {key}={shlex.quote(value)}" for key, value in env.items())
