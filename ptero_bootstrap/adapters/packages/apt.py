"""APT: Ubuntu and Debian."""

from __future__ import annotations

from ptero_bootstrap.adapters.packages.base import PackageManager


class AptPackageManager(PackageManager):
    """apt-get with an explicit ``update`` before installs."""

    binary = "apt-get"
    env = {"DEBIAN_FRONTEND": "noninteractive"}

    @property
    def name(self) -> str:
        return "apt"

    def quiet_args(self) -> list[str]:
        return ["-qq"]

    def update_repos(self, quiet: bool = False) -> None:
        args = self.quiet_args() if quiet else []
        self._run([self.binary, "-y", *args, "update"], quiet=quiet)
