"""
Package manager factory: pick the implementation for the detected OS.

Selection happens once at startup, keyed on the OS family
(see ``OS_FAMILIES``), and the instance is carried in the
BootstrapContext from then on.
"""

from __future__ import annotations

import logging

from ptero_bootstrap.adapters.packages.apt import AptPackageManager
from ptero_bootstrap.adapters.packages.base import PackageManager
from ptero_bootstrap.adapters.packages.rpm import DnfPackageManager, YumPackageManager
from ptero_bootstrap.core.errors import UnsupportedPlatformError
from ptero_bootstrap.core.models.os_info import OSInfo

logger = logging.getLogger(__name__)

_MANAGERS: dict[str, type[PackageManager]] = {
    "debian": AptPackageManager,
    "rhel": DnfPackageManager,
    "centos": YumPackageManager,
}


def get_package_manager(os_info: OSInfo, timeout: int | None = None) -> PackageManager:
    """Return the package manager for ``os_info``'s family.

    Raises:
        UnsupportedPlatformError: If the distro has no known family.
    """
    family = os_info.family
    cls = _MANAGERS.get(family or "")
    if cls is None:
        raise UnsupportedPlatformError(f"No package manager known for {os_info.name!r}")
    manager = cls(timeout=timeout)
    logger.debug("Selected %r for %s", manager, os_info.label())
    return manager
