"""
Package manager base: the contract every distro family implements.

Unlike the general adapter pattern of capturing failures in a result,
package managers FAIL FAST: any non-zero exit raises
PackageManagerError and the bootstrap stops. There is no retry and
no cleanup of partially installed packages.

To add a distro family:
    1. Subclass PackageManager
    2. Set ``binary`` and implement ``name`` (and ``update_repos`` if the
       family needs an explicit metadata refresh)
    3. Register it in ``registry._MANAGERS``
"""

from __future__ import annotations

import logging
import shlex
from abc import ABC, abstractmethod
from collections.abc import Sequence

from ptero_bootstrap.core.errors import PackageManagerError
from ptero_bootstrap.core.services.execution.subprocess_runner import (
    command_exists,
    run_command,
)

logger = logging.getLogger(__name__)


def normalize_packages(packages: str | Sequence[str]) -> list[str]:
    """Turn a package list into a flat argv-ready list.

    A single string is split shell-style, so ``"php8.1 php8.1-cli"`` and
    ``["php8.1", "php8.1-cli"]`` are equivalent. Nothing is ever handed
    to a shell.
    """
    if isinstance(packages, str):
        return shlex.split(packages)
    result: list[str] = []
    for item in packages:
        result.extend(shlex.split(item))
    return result


class PackageManager(ABC):
    """Abstract base class for native package managers."""

    binary: str = ""
    env: dict[str, str] | None = None

    def __init__(self, timeout: int | None = None):
        self.timeout = timeout

    @property
    @abstractmethod
    def name(self) -> str:
        """Identifier (e.g. 'apt', 'dnf', 'yum')."""

    def is_available(self) -> bool:
        """Check the underlying CLI exists. Fast, never raises."""
        return command_exists(self.binary)

    def quiet_args(self) -> list[str]:
        return ["-q"]

    def update_repos(self, quiet: bool = False) -> None:
        """Refresh repository metadata.

        No-op by default: RPM-family tools refresh metadata as part of
        ``install``.
        """
        logger.debug("%s: no separate metadata refresh", self.name)

    def install_packages(self, packages: str | Sequence[str], quiet: bool = False) -> None:
        """Install ``packages``, raising PackageManagerError on failure."""
        pkgs = normalize_packages(packages)
        if not pkgs:
            logger.debug("%s: nothing to install", self.name)
            return
        args = self.quiet_args() if quiet else []
        self._run([self.binary, "-y", *args, "install", *pkgs], quiet=quiet)

    def _run(self, cmd: list[str], quiet: bool = False) -> None:
        # Non-quiet runs stream to the terminal and leave stderr uncaptured
        logger.info("Running: %s", " ".join(cmd))
        result = run_command(
            cmd, timeout=self.timeout, env_overrides=self.env, stream=not quiet,
        )
        if not result["ok"]:
            stderr = result.get("stderr", "")
            if stderr:
                logger.error("%s stderr:\n%s", self.name, stderr)
            raise PackageManagerError(
                f"{' '.join(cmd)}: {result['error']}",
                command=cmd,
                returncode=result.get("returncode"),
                stderr=stderr,
            )
        logger.debug("%s finished in %sms", self.name, result.get("elapsed_ms"))

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"
