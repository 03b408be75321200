"""RPM family: dnf for Rocky/AlmaLinux, yum for CentOS 7."""

from __future__ import annotations

from ptero_bootstrap.adapters.packages.base import PackageManager


class DnfPackageManager(PackageManager):
    binary = "dnf"

    @property
    def name(self) -> str:
        return "dnf"


class YumPackageManager(PackageManager):
    binary = "yum"

    @property
    def name(self) -> str:
        return "yum"
