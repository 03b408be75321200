"""
Shared test fixtures and configuration.
"""

from pathlib import Path

import pytest

from ptero_bootstrap.core.services.detection import os_release


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch):
    """Keep host config and env vars out of every test."""
    for var in ("PB_CONFIG", "PB_GITHUB_SOURCE", "PB_SCRIPT_RELEASE",
                "PB_LOG_LEVEL", "PB_LOG_FILE", "PB_LOG_FILE_LEVEL"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture(autouse=True)
def no_lsb_release(monkeypatch):
    """Pretend lsb_release is not installed so the host never leaks in."""
    monkeypatch.setattr(os_release, "command_exists", lambda name: False)


@pytest.fixture
def fake_root(tmp_path: Path) -> Path:
    """An empty filesystem root with an /etc directory."""
    root = tmp_path / "rootfs"
    (root / "etc").mkdir(parents=True)
    return root


@pytest.fixture
def write_os_release(fake_root: Path):
    """Write /etc/os-release under the fake root."""

    def _write(os_id: str, version_id: str, **extra: str) -> Path:
        lines = [f'ID="{os_id}"', f'VERSION_ID="{version_id}"']
        lines += [f'{key}="{value}"' for key, value in extra.items()]
        path = fake_root / "etc" / "os-release"
        path.write_text("\n".join(lines) + "\n")
        return fake_root

    return _write


@pytest.fixture
def as_root(monkeypatch):
    """Run as uid 0."""
    monkeypatch.setattr("os.geteuid", lambda: 0)


class CommandRecorder:
    """Stand-in for ``run_command`` that records argv and replays results."""

    def __init__(self, results: list[dict] | None = None):
        self.calls: list[list[str]] = []
        self.kwargs: list[dict] = []
        self._results = list(results or [])

    def __call__(self, cmd, **kwargs):
        self.calls.append(list(cmd))
        self.kwargs.append(kwargs)
        if self._results:
            return self._results.pop(0)
        return {"ok": True, "stdout": "", "returncode": 0, "elapsed_ms": 1}


@pytest.fixture
def recorder():
    return CommandRecorder
