"""
Domain models: Pydantic types for the bootstrapper.

    from ptero_bootstrap.core.models import OSInfo, BootstrapSettings
"""

from ptero_bootstrap.core.models.os_info import OS_FAMILIES, OSInfo
from ptero_bootstrap.core.models.settings import BootstrapSettings

__all__ = [
    "BootstrapSettings",
    "OS_FAMILIES",
    "OSInfo",
]
