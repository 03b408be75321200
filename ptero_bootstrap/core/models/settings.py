"""
Bootstrap settings: loaded from bootstrap.yml.

Every field has a default, so an absent config file is a valid
configuration. The values here end up in the exported environment
consumed by the panel/wings install scripts.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

DEFAULT_PANEL_DL_URL = (
    "https://github.com/pterodactyl/panel/releases/latest/download/panel.tar.gz"
)
DEFAULT_WINGS_DL_BASE_URL = (
    "https://github.com/pterodactyl/wings/releases/latest/download/wings_linux_"
)
_RAW_BASE = "https://raw.githubusercontent.com/vilhelmprytz/pterodactyl-installer"


class BootstrapSettings(BaseModel):
    """Typed view of bootstrap.yml."""

    # Versioning of the installer scripts themselves
    github_source: str = "master"
    script_release: str = "canary"

    # Tracked upstream projects (owner/repo)
    panel_project: str = "pterodactyl/panel"
    wings_project: str = "pterodactyl/wings"

    # Download locations
    panel_dl_url: str = DEFAULT_PANEL_DL_URL
    wings_dl_base_url: str = DEFAULT_WINGS_DL_BASE_URL
    github_api_url: str = "https://api.github.com"

    # Execution
    http_timeout: int = Field(default=30, gt=0)
    command_timeout: int | None = None   # None = wait forever
    quiet_packages: bool = True
    prerequisites: list[str] = Field(default_factory=lambda: ["curl"])

    @property
    def github_base_url(self) -> str:
        """Raw-content base URL for the installer scripts at ``github_source``."""
        return f"{_RAW_BASE}/{self.github_source}"

    def wings_dl_url(self, arch: str) -> str:
        """Architecture-suffixed wings binary URL."""
        return f"{self.wings_dl_base_url}{arch}"
