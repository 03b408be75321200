"""
Support gate: is this OS/version pair one we install on.

Matching is exact string equality on ``(name, version_major)``.
No numeric comparison: ``"09"`` is not ``"9"``.

CPU architecture is deliberately not checked here; panel and wings
have different architecture requirements and check it themselves.
"""

from __future__ import annotations

import logging
import os

from ptero_bootstrap.core.errors import PrivilegeError, UnsupportedPlatformError
from ptero_bootstrap.core.models.os_info import OSInfo

logger = logging.getLogger(__name__)

SUPPORTED_PLATFORMS: frozenset[tuple[str, str]] = frozenset({
    ("ubuntu", "18"),
    ("ubuntu", "20"),
    ("debian", "9"),
    ("debian", "10"),
    ("debian", "11"),
    ("centos", "7"),
    ("rocky", "8"),
    ("almalinux", "8"),
})


def is_supported(os_info: OSInfo) -> bool:
    """True if ``(name, version_major)`` is in the allow-list."""
    return (os_info.name, os_info.version_major) in SUPPORTED_PLATFORMS


def check_supported(os_info: OSInfo) -> None:
    """Raise UnsupportedPlatformError unless the host is in the allow-list."""
    if not is_supported(os_info):
        logger.debug("Rejected platform %r", (os_info.name, os_info.version_major))
        raise UnsupportedPlatformError("Unsupported OS")


def require_root() -> None:
    """Raise PrivilegeError unless the effective uid is 0."""
    if os.geteuid() != 0:
        raise PrivilegeError("This script must be executed with root privileges.")
