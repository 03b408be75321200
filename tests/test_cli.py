"""
Tests for CLI commands: bootstrap, detect, versions, packages, util, collect.
"""

import json

import pytest
from click.testing import CliRunner

from ptero_bootstrap.adapters.packages import base
from ptero_bootstrap.core.errors import ReleaseLookupError
from ptero_bootstrap.core.services import releases, validation
from ptero_bootstrap.core.services.releases import ReleaseVersions
from ptero_bootstrap.core.use_cases import bootstrap as uc
from ptero_bootstrap.main import cli


@pytest.fixture
def offline(monkeypatch):
    """Curl present, GitHub answers with fixed tags."""
    versions = ReleaseVersions(panel="v1.11.3", wings="v1.11.8")
    monkeypatch.setattr(uc, "command_exists", lambda name: True)
    monkeypatch.setattr(uc, "get_latest_versions", lambda settings: versions)
    monkeypatch.setattr(releases, "get_latest_versions", lambda settings: versions)
    return versions


def _invoke(args, root=None, **kwargs):
    obj = {"root": root} if root is not None else None
    return CliRunner().invoke(cli, args, obj=obj, **kwargs)


class TestCLIGlobal:
    def test_help(self):
        result = _invoke(["--help"])
        assert result.exit_code == 0
        assert "ptero-bootstrap" in result.output
        for command in ("bootstrap", "detect", "versions", "packages", "util", "collect"):
            assert command in result.output

    def test_version(self):
        result = _invoke(["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output


class TestBootstrapCommand:
    def test_supported_host(self, as_root, write_os_release, offline):
        result = _invoke(["bootstrap"], root=write_os_release("ubuntu", "20.04"))
        assert result.exit_code == 0, result.output
        assert "* ubuntu 20.04 is supported." in result.output
        assert "PTERODACTYL_PANEL_VERSION" in result.output

    def test_unsupported_host(self, as_root, write_os_release, offline):
        result = _invoke(["bootstrap"], root=write_os_release("fedora", "36"))
        assert result.exit_code == 1
        assert "fedora 36 is not supported" in result.output
        assert "ERROR" in result.output
        assert "Unsupported OS" in result.output

    def test_requires_root(self, monkeypatch, write_os_release, offline):
        monkeypatch.setattr("os.geteuid", lambda: 1000)
        result = _invoke(["bootstrap"], root=write_os_release("ubuntu", "20.04"))
        assert result.exit_code == 1
        assert "root privileges" in result.output

    def test_export(self, as_root, write_os_release, offline):
        result = _invoke(["bootstrap", "--export"], root=write_os_release("debian", "11"))
        assert result.exit_code == 0
        assert "export OS=debian" in result.output
        assert "export OS_VER_MAJOR=11" in result.output
        assert "export PTERODACTYL_WINGS_VERSION=v1.11.8" in result.output

    def test_json_failure(self, as_root, write_os_release, offline):
        result = _invoke(["bootstrap", "--json"], root=write_os_release("centos", "8"))
        assert result.exit_code == 1
        assert '"error_type": "UnsupportedPlatformError"' in result.output

    def test_skip_versions(self, as_root, write_os_release, monkeypatch):
        monkeypatch.setattr(uc, "command_exists", lambda name: True)
        result = _invoke(["bootstrap", "--skip-versions"], root=write_os_release("rocky", "8.7"))
        assert result.exit_code == 0
        assert "Retrieving release information" not in result.output

    def test_release_lookup_failure(self, as_root, write_os_release, monkeypatch):
        def _fail(settings):
            raise ReleaseLookupError("pterodactyl/panel", "no_release", "HTTP 404")

        monkeypatch.setattr(uc, "command_exists", lambda name: True)
        monkeypatch.setattr(uc, "get_latest_versions", _fail)
        result = _invoke(["bootstrap"], root=write_os_release("ubuntu", "18.04"))
        assert result.exit_code == 1
        assert "no_release" in result.output

    def test_warns_without_wings_binary(self, as_root, write_os_release, monkeypatch):
        monkeypatch.setattr(uc, "command_exists", lambda name: True)
        monkeypatch.setattr("platform.machine", lambda: "riscv64")
        result = _invoke(
            ["bootstrap", "--skip-versions", "--export"],
            root=write_os_release("ubuntu", "20.04"),
        )
        assert result.exit_code == 0, result.output
        assert "WARNING: No wings binary is published for riscv64" in result.output
        assert "export CPU_ARCHITECTURE=riscv64" in result.output

    def test_no_warning_on_amd64(self, as_root, write_os_release, monkeypatch):
        monkeypatch.setattr(uc, "command_exists", lambda name: True)
        monkeypatch.setattr("platform.machine", lambda: "x86_64")
        result = _invoke(["bootstrap", "--skip-versions"], root=write_os_release("ubuntu", "20.04"))
        assert result.exit_code == 0
        assert "WARNING" not in result.output


class TestDetectCommand:
    def test_supported(self, write_os_release):
        result = _invoke(["detect"], root=write_os_release("almalinux", "8.8"))
        assert result.exit_code == 0
        assert "almalinux 8.8" in result.output
        assert "Supported" in result.output

    def test_unsupported_json(self, write_os_release):
        result = _invoke(["detect", "--json"], root=write_os_release("fedora", "36"))
        assert result.exit_code == 1
        data = json.loads(result.output)
        assert data["name"] == "fedora"
        assert data["version_major"] == "36"
        assert data["supported"] is False
        assert data["family"] is None


class TestVersionsCommand:
    def test_text(self, offline):
        result = _invoke(["versions"])
        assert result.exit_code == 0
        assert "v1.11.3" in result.output
        assert "v1.11.8" in result.output

    def test_json(self, offline):
        result = _invoke(["versions", "--json"])
        assert json.loads(result.output) == {"panel": "v1.11.3", "wings": "v1.11.8"}

    def test_error(self, monkeypatch):
        def _fail(settings):
            raise ReleaseLookupError("pterodactyl/panel", "network", "timed out")

        monkeypatch.setattr(releases, "get_latest_versions", _fail)
        result = _invoke(["versions"])
        assert result.exit_code == 1
        assert "network" in result.output


class TestPackagesCommand:
    def test_install(self, as_root, write_os_release, monkeypatch, recorder):
        rec = recorder()
        monkeypatch.setattr(base, "run_command", rec)
        result = _invoke(["packages", "install", "curl", "tar"], root=write_os_release("ubuntu", "20.04"))
        assert result.exit_code == 0, result.output
        assert rec.calls == [
            ["apt-get", "-y", "update"],
            ["apt-get", "-y", "install", "curl", "tar"],
        ]

    def test_install_no_update_quiet(self, as_root, write_os_release, monkeypatch, recorder):
        rec = recorder()
        monkeypatch.setattr(base, "run_command", rec)
        result = _invoke(
            ["packages", "install", "--no-update", "--quiet-pm", "curl"],
            root=write_os_release("rocky", "8.7"),
        )
        assert result.exit_code == 0
        assert rec.calls == [["dnf", "-y", "-q", "install", "curl"]]

    def test_install_failure(self, as_root, write_os_release, monkeypatch, recorder):
        rec = recorder([{"ok": False, "error": "Command failed (exit 1)", "returncode": 1, "stderr": ""}])
        monkeypatch.setattr(base, "run_command", rec)
        result = _invoke(["packages", "install", "--no-update", "nope"], root=write_os_release("centos", "7"))
        assert result.exit_code == 1
        assert "exit 1" in result.output

    def test_update_unsupported(self, as_root, write_os_release):
        result = _invoke(["packages", "update"], root=write_os_release("fedora", "36"))
        assert result.exit_code == 1
        assert "Unsupported OS" in result.output


class TestUtilCommands:
    def test_password_length(self):
        result = _invoke(["util", "password", "--length", "24"])
        assert result.exit_code == 0
        assert len(result.output.rstrip("\n")) == 24

    def test_password_rejects_zero(self):
        result = _invoke(["util", "password", "--length", "0"])
        assert result.exit_code == 2

    def test_email_valid(self):
        assert _invoke(["util", "email", "user@example.com"]).exit_code == 0

    def test_email_invalid(self):
        result = _invoke(["util", "email", "user@"])
        assert result.exit_code == 1
        assert "invalid" in result.output

    def test_ip_routable(self, monkeypatch, recorder):
        rec = recorder()
        monkeypatch.setattr(validation, "run_command", rec)
        result = _invoke(["util", "ip", "10.0.0.5"])
        assert result.exit_code == 0
        assert result.output.strip() == "routable"
        assert rec.calls == [["ip", "route", "get", "10.0.0.5"]]

    def test_ip_unroutable(self, monkeypatch, recorder):
        rec = recorder([{"ok": False, "error": "Command failed (exit 2)", "returncode": 2}])
        monkeypatch.setattr(validation, "run_command", rec)
        result = _invoke(["util", "ip", "192.0.2.1"])
        assert result.exit_code == 1
        assert "unroutable" in result.output

    def test_ip_malformed_spawns_nothing(self, monkeypatch, recorder):
        rec = recorder()
        monkeypatch.setattr(validation, "run_command", rec)
        result = _invoke(["util", "ip", "999.1.1.1"])
        assert result.exit_code == 1
        assert rec.calls == []


class TestCollectCommand:
    ANSWERS = "\n".join([
        "",                    # database name → default
        "",                    # database user → default
        "",                    # database password → generated
        "ops@example.com",
        "admin@example.com",
        "admin",
        "Ada",
        "Lovelace",
        "s3cret",
    ]) + "\n"

    def test_json(self):
        result = _invoke(["collect", "--json"], input=self.ANSWERS + "y\n")
        assert result.exit_code == 0, result.output
        assert '"mysql_db": "panel"' in result.output
        assert '"mysql_user": "pterodactyl"' in result.output
        assert '"admin_username": "admin"' in result.output
        assert '"admin_password": "s3cret"' in result.output
        assert "(password hidden)" in result.output

    def test_export(self):
        result = _invoke(["collect", "--yes"], input=self.ANSWERS)
        assert result.exit_code == 0
        assert "export ADMIN_EMAIL=admin@example.com" in result.output
        assert "export ADMIN_LASTNAME=Lovelace" in result.output

    def test_declined(self):
        result = _invoke(["collect"], input=self.ANSWERS + "n\n")
        assert result.exit_code == 1
        assert "Installation aborted!" in result.output
        assert "export ADMIN_EMAIL" not in result.output
