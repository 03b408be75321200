"""
Detection: host operating system.

Read-only probes, consulted in strict priority order. The first probe
that applies wins and later probes are never looked at:

    1. /etc/os-release          (freedesktop.org / systemd)
    2. lsb_release command      (linuxbase.org)
    3. /etc/lsb-release         (Debian/Ubuntu without lsb_release)
    4. /etc/debian_version      (older Debian derivatives)
    5. /etc/SuSe-release        (older SuSE)
    6. /etc/redhat-release      (older Red Hat / CentOS)
    7. uname                    (anything else, incl. BSD)

All file paths are resolved under ``root`` so tests can point the
probes at a fake filesystem.
"""

from __future__ import annotations

import logging
import platform
import shlex
from pathlib import Path

from ptero_bootstrap.core.models.os_info import OSInfo
from ptero_bootstrap.core.services.execution.subprocess_runner import (
    command_exists,
    run_command,
)

logger = logging.getLogger(__name__)

OS_RELEASE = "etc/os-release"
LSB_RELEASE = "etc/lsb-release"
DEBIAN_VERSION = "etc/debian_version"
SUSE_RELEASE = "etc/SuSe-release"
REDHAT_RELEASE = "etc/redhat-release"


def parse_env_file(text: str) -> dict[str, str]:
    """Parse a shell-style ``KEY=value`` file (os-release, lsb-release).

    Quotes are removed the way the shell would when sourcing the file.
    Comments and blank lines are skipped.
    """
    data: dict[str, str] = {}
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        try:
            value = " ".join(shlex.split(value))
        except ValueError:
            # unbalanced quotes: take it literally
            value = value.strip().strip("\"'")
        data[key.strip()] = value
    return data


# ── Probes ──────────────────────────────────────────────────────
# Each returns (name, version, source) or None when it does not apply.


def _probe_os_release(root: Path) -> tuple[str, str, str] | None:
    path = root / OS_RELEASE
    if not path.is_file():
        return None
    data = parse_env_file(path.read_text(encoding="utf-8", errors="replace"))
    return data.get("ID", ""), data.get("VERSION_ID", ""), "os-release"


def _probe_lsb_release_cmd() -> tuple[str, str, str] | None:
    if not command_exists("lsb_release"):
        return None
    name = run_command(["lsb_release", "-si"])
    version = run_command(["lsb_release", "-sr"])
    if not (name["ok"] and version["ok"]):
        logger.debug("lsb_release present but failed: %s", name.get("error") or version.get("error"))
        return None
    return name["stdout"].strip(), version["stdout"].strip(), "lsb_release"


def _probe_lsb_release_file(root: Path) -> tuple[str, str, str] | None:
    path = root / LSB_RELEASE
    if not path.is_file():
        return None
    data = parse_env_file(path.read_text(encoding="utf-8", errors="replace"))
    return data.get("DISTRIB_ID", ""), data.get("DISTRIB_RELEASE", ""), "lsb-release"


def _probe_debian_version(root: Path) -> tuple[str, str, str] | None:
    path = root / DEBIAN_VERSION
    if not path.is_file():
        return None
    return "debian", path.read_text(encoding="utf-8", errors="replace").strip(), "debian_version"


def _probe_marker(root: Path, rel: str, name: str) -> tuple[str, str, str] | None:
    if not (root / rel).is_file():
        return None
    return name, "?", Path(rel).name


def _probe_uname() -> tuple[str, str, str]:
    return platform.system(), platform.release(), "uname"


# ── Public API ──────────────────────────────────────────────────


def major_version(version: str) -> str:
    """Text before the first ``.`` (``"20.04"`` → ``"20"``, ``"?"`` → ``"?"``)."""
    return version.split(".", 1)[0]


def detect_os(root: Path | str = "/") -> OSInfo:
    """Detect the host OS triple.

    Args:
        root: Filesystem root the ``/etc`` probes are resolved against.

    Returns:
        OSInfo with a lowercased name, the raw version, its major
        component and the CPU architecture.
    """
    root = Path(root)

    found = (
        _probe_os_release(root)
        or _probe_lsb_release_cmd()
        or _probe_lsb_release_file(root)
        or _probe_debian_version(root)
        or _probe_marker(root, SUSE_RELEASE, "SuSE")
        or _probe_marker(root, REDHAT_RELEASE, "Red Hat/CentOS")
        or _probe_uname()
    )
    name, version, source = found

    info = OSInfo(
        name=name.lower(),
        version=version,
        version_major=major_version(version),
        cpu_architecture=platform.machine(),
        source=source,
    )
    logger.info("Detected %s (major=%s, arch=%s) via %s",
                info.label(), info.version_major, info.cpu_architecture, source)
    return info
