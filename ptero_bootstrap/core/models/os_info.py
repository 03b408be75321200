"""
OS descriptor model: what host are we bootstrapping.

Built once by ``detect_os`` and never mutated afterwards. Everything
downstream (support gate, package-manager factory, exported env)
reads from this one object.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

# Distro id → package-manager family
OS_FAMILIES: dict[str, str] = {
    "ubuntu": "debian",
    "debian": "debian",
    "rocky": "rhel",
    "almalinux": "rhel",
    "centos": "centos",
}

# uname -m → release artifact suffix
_ARCH_MAP = {"x86_64": "amd64", "amd64": "amd64", "aarch64": "arm64", "arm64": "arm64"}


class OSInfo(BaseModel):
    """The detected OS triple plus CPU architecture."""

    model_config = ConfigDict(frozen=True)

    name: str
    version: str
    version_major: str
    cpu_architecture: str = ""
    source: str = ""            # which probe produced it (os-release, lsb_release, ...)

    @property
    def family(self) -> str | None:
        """Package-manager family, or None for unknown distros."""
        return OS_FAMILIES.get(self.name)

    @property
    def release_arch(self) -> str:
        """Architecture label used in release artifact names (amd64, arm64)."""
        machine = self.cpu_architecture.lower()
        return _ARCH_MAP.get(machine, machine)

    def label(self) -> str:
        """Human label, e.g. ``ubuntu 20.04``."""
        return f"{self.name} {self.version}"
