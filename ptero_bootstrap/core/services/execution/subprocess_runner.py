"""
Core subprocess runner.

The SINGLE PLACE where ``subprocess.run`` is called. Package managers,
``lsb_release`` and ``ip route`` all go through here, so logging and
error shaping are centralised.

Commands are always argv lists: never a shell string.
"""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
import sys
import time
from typing import Any

logger = logging.getLogger(__name__)

# Keep result payloads bounded; apt can be very chatty
_MAX_OUTPUT = 2000


def command_exists(name: str) -> bool:
    """True if ``name`` resolves to an executable on PATH."""
    return shutil.which(name) is not None


def run_command(
    cmd: list[str],
    *,
    timeout: int | None = None,
    env_overrides: dict[str, str] | None = None,
    stream: bool = False,
) -> dict[str, Any]:
    """Run a command and capture (or stream) its output.

    Args:
        cmd: Command list for ``subprocess.run()``.
        timeout: Seconds before giving up. None waits forever.
        env_overrides: Extra env vars for the child (e.g. DEBIAN_FRONTEND).
        stream: Send the child's output to the terminal instead of
            capturing it. Both streams go to our stderr so stdout stays
            free for ``--export`` output; ``stdout`` and ``stderr`` in the
            result are then empty.

    Returns:
        ``{"ok": True, "stdout": "...", "returncode": 0, "elapsed_ms": N}``
        on success, ``{"ok": False, "error": "...", "returncode": N,
        "stderr": "...", ...}`` on failure.
    """
    env = os.environ.copy()
    if env_overrides:
        env.update(env_overrides)

    logger.debug("Executing: %s", " ".join(cmd))
    start = time.monotonic()
    try:
        result = subprocess.run(
            cmd,
            stdout=sys.stderr.fileno() if stream else subprocess.PIPE,
            stderr=None if stream else subprocess.PIPE,
            text=True,
            timeout=timeout,
            env=env,
        )
    except subprocess.TimeoutExpired:
        return {"ok": False, "error": f"Command timed out ({timeout}s)", "returncode": None}
    except FileNotFoundError:
        return {"ok": False, "error": f"Command not found: {cmd[0]}", "returncode": 127}
    except OSError as e:
        logger.exception("Subprocess error: %s", cmd)
        return {"ok": False, "error": str(e), "returncode": None}

    elapsed_ms = int((time.monotonic() - start) * 1000)
    stdout = result.stdout[-_MAX_OUTPUT:] if result.stdout else ""

    if result.returncode == 0:
        return {
            "ok": True,
            "stdout": stdout,
            "returncode": 0,
            "elapsed_ms": elapsed_ms,
        }

    return {
        "ok": False,
        "error": f"Command failed (exit {result.returncode})",
        "returncode": result.returncode,
        "stderr": result.stderr[-_MAX_OUTPUT:] if result.stderr else "",
        "stdout": stdout,
        "elapsed_ms": elapsed_ms,
    }
