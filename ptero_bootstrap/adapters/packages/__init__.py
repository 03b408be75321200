"""Native package managers, one implementation per distro family."""

from ptero_bootstrap.adapters.packages.apt import AptPackageManager
from ptero_bootstrap.adapters.packages.base import PackageManager, normalize_packages
from ptero_bootstrap.adapters.packages.registry import get_package_manager
from ptero_bootstrap.adapters.packages.rpm import DnfPackageManager, YumPackageManager

__all__ = [
    "AptPackageManager",
    "DnfPackageManager",
    "PackageManager",
    "YumPackageManager",
    "get_package_manager",
    "normalize_packages",
]
