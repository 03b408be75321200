"""
Bootstrap error hierarchy.

Everything the CLI treats as fatal derives from ``BootstrapError``.
The CLI catches the base class, prints a labeled error and exits 1.
Validation failures inside the input collectors are NOT errors -
they re-prompt and never reach this hierarchy.
"""

from __future__ import annotations


class BootstrapError(Exception):
    """Base class for fatal bootstrap failures."""


class PrivilegeError(BootstrapError):
    """Raised when the process is not running as root."""


class UnsupportedPlatformError(BootstrapError):
    """Raised when the detected OS/version is not in the allow-list."""


class PackageManagerError(BootstrapError):
    """Raised when the native package manager exits non-zero."""

    def __init__(
        self,
        message: str,
        *,
        command: list[str] | None = None,
        returncode: int | None = None,
        stderr: str = "",
    ):
        super().__init__(message)
        self.command = command or []
        self.returncode = returncode
        self.stderr = stderr


class ReleaseLookupError(BootstrapError):
    """Raised when the latest release tag of a project cannot be resolved.

    ``reason`` is one of ``"network"``, ``"no_release"`` or
    ``"invalid_response"`` so callers can tell a missing release
    apart from a transport failure.
    """

    def __init__(self, project: str, reason: str, detail: str = ""):
        message = f"Cannot resolve latest release of {project}: {reason}"
        if detail:
            message += f" ({detail})"
        super().__init__(message)
        self.project = project
        self.reason = reason
        self.detail = detail
