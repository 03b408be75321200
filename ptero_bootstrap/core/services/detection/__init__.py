"""
Detection: ``__init__.py`` re-exports all detection functions.

These functions READ system state but never WRITE.
"""

from ptero_bootstrap.core.services.detection.os_release import (  # noqa: F401
    detect_os,
    major_version,
    parse_env_file,
)
from ptero_bootstrap.core.services.detection.support import (  # noqa: F401
    SUPPORTED_PLATFORMS,
    check_supported,
    is_supported,
    require_root,
)
