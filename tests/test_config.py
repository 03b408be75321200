"""
Tests for configuration loading: bootstrap.yml parsing and validation.
"""

import textwrap
from pathlib import Path

import pytest

from ptero_bootstrap.core.config.loader import ConfigError, find_config_file, load_settings
from ptero_bootstrap.core.models import BootstrapSettings


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    content = textwrap.dedent("""\
        github_source: develop
        script_release: v0.14.0
        http_timeout: 10
        command_timeout: 900
        prerequisites:
          - curl
          - tar
    """)
    path = tmp_path / "bootstrap.yml"
    path.write_text(content)
    return path


class TestDefaults:
    def test_no_file_means_defaults(self):
        settings = load_settings()
        assert settings == BootstrapSettings()
        assert settings.github_source == "master"
        assert settings.script_release == "canary"
        assert settings.prerequisites == ["curl"]
        assert settings.command_timeout is None

    def test_derived_urls(self):
        s = BootstrapSettings(github_source="develop")
        assert s.github_base_url.endswith("/pterodactyl-installer/develop")
        assert s.wings_dl_url("amd64").endswith("/wings_linux_amd64")


class TestLoadSettings:
    def test_explicit_path(self, config_file):
        settings = load_settings(config_file)
        assert settings.github_source == "develop"
        assert settings.http_timeout == 10
        assert settings.command_timeout == 900
        assert settings.prerequisites == ["curl", "tar"]

    def test_found_walking_up(self, config_file, tmp_path, monkeypatch):
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        monkeypatch.chdir(nested)
        assert find_config_file() == config_file
        assert load_settings().script_release == "v0.14.0"

    def test_pb_config_env(self, config_file, monkeypatch, tmp_path):
        other = tmp_path / "elsewhere"
        other.mkdir()
        monkeypatch.chdir(other)
        monkeypatch.setenv("PB_CONFIG", str(config_file))
        assert load_settings().github_source == "develop"

    def test_wrapped_under_bootstrap_key(self, tmp_path):
        path = tmp_path / "bootstrap.yml"
        path.write_text("bootstrap:\n  script_release: stable\n")
        assert load_settings(path).script_release == "stable"

    def test_empty_file(self, tmp_path):
        path = tmp_path / "bootstrap.yml"
        path.write_text("")
        assert load_settings(path) == BootstrapSettings()

    def test_env_overrides_file(self, config_file, monkeypatch):
        monkeypatch.setenv("PB_GITHUB_SOURCE", "feature-x")
        monkeypatch.setenv("PB_SCRIPT_RELEASE", "beta")
        settings = load_settings(config_file)
        assert settings.github_source == "feature-x"
        assert settings.script_release == "beta"


class TestConfigErrors:
    def test_explicit_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="not found"):
            load_settings(tmp_path / "nope.yml")

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "bootstrap.yml"
        path.write_text("github_source: [unclosed\n")
        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_settings(path)

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "bootstrap.yml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigError, match="Expected a YAML mapping"):
            load_settings(path)

    def test_invalid_value(self, tmp_path):
        path = tmp_path / "bootstrap.yml"
        path.write_text("http_timeout: 0\n")
        with pytest.raises(ConfigError, match="Invalid bootstrap configuration"):
            load_settings(path)
