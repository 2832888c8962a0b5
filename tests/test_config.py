"""Tests for configuration management."""

from pathlib import Path

import pytest

from dvops.config import (
    ArgoCDConfig,
    ConfigLoader,
    DvOpsConfig,
    GlobalConfig,
    PathsConfig,
    ProfileConfig,
    get_default_config,
)
from dvops.core.exceptions import ConfigError
from dvops.core.logging import LogLevel


class TestArgoCDConfig:
    def test_default_values(self):
        config = ArgoCDConfig()
        assert config.binary == "argocd"
        assert config.server is None
        assert config.timeout == 30
        assert config.grpc_web is False

    def test_get_server_from_env(self, monkeypatch):
        monkeypatch.setenv("ARGOCD_SERVER", "argocd.env.example.com")
        config = ArgoCDConfig(server="argocd.config.example.com")
        assert config.get_server() == "argocd.env.example.com"

    def test_dvops_env_wins(self, monkeypatch):
        monkeypatch.setenv("ARGOCD_SERVER", "generic")
        monkeypatch.setenv("DVOPS_ARGOCD_SERVER", "specific")
        assert ArgoCDConfig().get_server() == "specific"

    def test_get_auth_token_from_env(self, monkeypatch):
        monkeypatch.setenv("DVOPS_ARGOCD_TOKEN", "token-1")
        assert ArgoCDConfig(auth_token="from_env").get_auth_token() == "token-1"

    def test_explicit_auth_token(self, monkeypatch):
        monkeypatch.setenv("ARGOCD_AUTH_TOKEN", "env")
        assert ArgoCDConfig(auth_token="literal").get_auth_token() == "literal"

    def test_invalid_timeout(self):
        with pytest.raises(ValueError):
            ArgoCDConfig(timeout=0)


class TestPathsConfig:
    def test_defaults_to_cwd(self):
        paths = PathsConfig()
        assert paths.get_root() == Path.cwd()
        assert paths.template_path() == Path.cwd() / "addons" / "templates" / "project-template.yaml"

    def test_project_file(self):
        paths = PathsConfig(root="/srv/dv-ops")
        assert paths.project_file("sandbox") == Path("/srv/dv-ops/projects/sandbox.yaml")

    def test_expands_user(self):
        paths = PathsConfig(root="~/dv-ops")
        assert paths.get_root() == Path.home() / "dv-ops"


class TestGlobalConfig:
    def test_default_values(self):
        config = GlobalConfig()
        assert config.color == "auto"
        assert config.verbosity == LogLevel.WARNING

    def test_invalid_color(self):
        with pytest.raises(ValueError):
            GlobalConfig(color="invalid")


class TestDvOpsConfig:
    def test_default_profile(self):
        config = DvOpsConfig()
        assert isinstance(config.get_profile(), ProfileConfig)

    def test_get_profile_not_found(self):
        with pytest.raises(ConfigError):
            DvOpsConfig().get_profile("nonexistent")

    def test_global_alias(self):
        config = DvOpsConfig(**{"global": {"color": "never"}})
        assert config.global_settings.color == "never"


class TestConfigLoader:
    def test_defaults_without_files(self):
        config = ConfigLoader().load()
        assert config == get_default_config()

    def test_explicit_file(self, tmp_path):
        config_file = tmp_path / "custom.yaml"
        config_file.write_text(
            "profiles:\n  prod:\n    argocd:\n      server: argocd.prod.example.com\n      grpc_web: true\n"
        )
        config = ConfigLoader().load(config_file)
        assert config.get_profile("prod").argocd.server == "argocd.prod.example.com"
        assert config.get_profile("prod").argocd.grpc_web is True

    def test_missing_explicit_file(self, tmp_path):
        with pytest.raises(ConfigError):
            ConfigLoader().load(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, tmp_path):
        config_file = tmp_path / "bad.yaml"
        config_file.write_text("paths: [unclosed\n")
        with pytest.raises(ConfigError):
            ConfigLoader().load(config_file)

    def test_non_mapping(self, tmp_path):
        config_file = tmp_path / "list.yaml"
        config_file.write_text("- a\n- b\n")
        with pytest.raises(ConfigError):
            ConfigLoader().load(config_file)

    def test_merge_order(self, tmp_path, monkeypatch):
        user_config = tmp_path / "home" / ".dvops" / "config.yaml"
        user_config.parent.mkdir(parents=True)
        user_config.write_text("paths:\n  projects_dir: user-projects\n  templates_dir: user-templates\n")

        project_dir = tmp_path / "repo" / "nested"
        project_dir.mkdir(parents=True)
        (tmp_path / "repo" / "dvops.yaml").write_text("paths:\n  projects_dir: repo-projects\n")

        explicit = tmp_path / "explicit.yaml"
        explicit.write_text("global:\n  verbosity: debug\n")

        monkeypatch.chdir(project_dir)
        config = ConfigLoader(user_config_path=user_config).load(explicit)

        assert config.paths.projects_dir == "repo-projects"
        assert config.paths.templates_dir == "user-templates"
        assert config.global_settings.verbosity == LogLevel.DEBUG
