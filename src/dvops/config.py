"""Configuration management for dvops using Pydantic."""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator

from dvops.core.exceptions import ConfigError
from dvops.core.logging import LogLevel
from dvops.core.utils import merge_dicts


class ArgoCDConfig(BaseModel):
    """Argo CD CLI configuration."""

    binary: str = "argocd"
    server: str | None = None
    auth_token: str | None = None
    grpc_web: bool = False
    insecure: bool = False
    timeout: int = 30

    @field_validator("timeout")
    @classmethod
    def validate_timeout(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("timeout must be a positive number of seconds")
        return v

    def get_binary(self) -> str:
        """Get the argocd executable from config or environment."""
        return os.environ.get("DVOPS_ARGOCD_BIN") or self.binary

    def get_server(self) -> str | None:
        """Get the Argo CD server from config or environment."""
        return (
            os.environ.get("DVOPS_ARGOCD_SERVER")
            or os.environ.get("ARGOCD_SERVER")
            or self.server
        )

    def get_auth_token(self) -> str | None:
        """Get the Argo CD auth token from config or environment."""
        token = self.auth_token
        if token == "from_env" or token is None:
            token = (
                os.environ.get("DVOPS_ARGOCD_TOKEN")
                or os.environ.get("ARGOCD_AUTH_TOKEN")
            )
        return token


class PathsConfig(BaseModel):
    """Layout of the dv-ops repository."""

    root: str | None = None
    templates_dir: str = "addons/templates"
    template_name: str = "project-template.yaml"
    projects_dir: str = "projects"

    def get_root(self) -> Path:
        """Get the dv-ops root, defaulting to the current directory."""
        return Path(self.root).expanduser() if self.root else Path.cwd()

    def template_path(self) -> Path:
        """Path of the project template."""
        return self.get_root() / self.templates_dir / self.template_name

    def projects_path(self) -> Path:
        """Directory the project files are written to."""
        return self.get_root() / self.projects_dir

    def project_file(self, project_name: str) -> Path:
        """Path of the generated file for a project."""
        return self.projects_path() / f"{project_name}.yaml"


class ProfileConfig(BaseModel):
    """Profile configuration grouping per-environment settings."""

    argocd: ArgoCDConfig = Field(default_factory=ArgoCDConfig)


class GlobalConfig(BaseModel):
    """Global settings."""

    color: str = "auto"  # auto, always, never
    verbosity: LogLevel = LogLevel.WARNING

    @field_validator("color")
    @classmethod
    def validate_color(cls, v: str) -> str:
        if v not in ("auto", "always", "never"):
            raise ValueError("color must be 'auto', 'always', or 'never'")
        return v


class DvOpsConfig(BaseModel):
    """Main configuration model."""

    model_config = {"populate_by_name": True}

    version: str = "1"
    global_settings: GlobalConfig = Field(default_factory=GlobalConfig, alias="global")
    paths: PathsConfig = Field(default_factory=PathsConfig)
    profiles: dict[str, ProfileConfig] = Field(default_factory=lambda: {"default": ProfileConfig()})

    def get_profile(self, name: str | None = None) -> ProfileConfig:
        """Get a profile by name, defaulting to 'default'."""
        profile_name = name or "default"
        if profile_name not in self.profiles:
            raise ConfigError(f"Profile '{profile_name}' not found")
        return self.profiles[profile_name]


class ConfigLoader:
    """Loads and merges configuration from multiple sources."""

    CONFIG_FILENAMES = ["dvops.yaml", "dvops.yml", ".dvops.yaml", ".dvops.yml"]

    def __init__(self, user_config_path: Path | None = None):
        self._user_config_path = user_config_path or Path.home() / ".dvops" / "config.yaml"

    def load(self, config_file: str | Path | None = None) -> DvOpsConfig:
        """Load configuration from files.

        Priority (highest to lowest):
        1. Explicitly specified config file
        2. Project config (./dvops.yaml, searched upwards)
        3. User config (~/.dvops/config.yaml)

        Args:
            config_file: Optional explicit config file path

        Returns:
            Merged configuration
        """
        configs: list[dict[str, Any]] = []

        if self._user_config_path.exists():
            configs.append(self._load_yaml_file(self._user_config_path))

        project_config = self._find_project_config()
        if project_config:
            configs.append(self._load_yaml_file(project_config))

        if config_file:
            config_path = Path(config_file)
            if not config_path.exists():
                raise ConfigError(f"Config file not found: {config_file}")
            configs.append(self._load_yaml_file(config_path))

        merged: dict[str, Any] = {}
        for config in configs:
            merged = merge_dicts(merged, config)

        try:
            return DvOpsConfig(**merged)
        except ValueError as e:
            raise ConfigError(f"Invalid configuration: {e}")

    def _find_project_config(self) -> Path | None:
        """Find project config file in current or parent directories."""
        current = Path.cwd()

        while current != current.parent:
            for filename in self.CONFIG_FILENAMES:
                config_path = current / filename
                if config_path.exists():
                    return config_path
            current = current.parent

        return None

    def _load_yaml_file(self, path: Path) -> dict[str, Any]:
        try:
            with open(path) as f:
                content = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {path}: {e}")
        except OSError as e:
            raise ConfigError(f"Cannot read {path}: {e}")
        if not isinstance(content, dict):
            raise ConfigError(f"Config file {path} must contain a mapping")
        return content


def load_config(config_file: str | Path | None = None) -> DvOpsConfig:
    """Load dvops configuration.

    Args:
        config_file: Optional explicit config file path

    Returns:
        Loaded configuration
    """
    return ConfigLoader().load(config_file)


def get_default_config() -> DvOpsConfig:
    """Get default configuration without loading from files."""
    return DvOpsConfig()
