"""Shared state for a single dvops invocation."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

from dvops.config import DvOpsConfig, PathsConfig, ProfileConfig, get_default_config
from dvops.core.logging import LogLevel, StructuredLogger, setup_logging
from dvops.core.output import OutputFormat, OutputFormatter

if TYPE_CHECKING:
    from dvops.clients.argocd import ArgoCDClient


def resolve_color(setting: str, no_color: bool = False) -> bool:
    """Decide whether to emit color from the config setting and --no-color."""
    if no_color or setting == "never":
        return False
    if setting == "always":
        return True
    return sys.stdout.isatty()


class DvOpsContext:
    """Configuration, reporter and clients for one run.

    Built once from the parsed command line and handed to each stage;
    nothing here is global.
    """

    def __init__(
        self,
        config: DvOpsConfig | None = None,
        profile: str | None = None,
        output_format: OutputFormat | None = None,
        debug: bool = False,
        quiet: bool = False,
        color: bool = True,
        root: str | None = None,
        timeout: int | None = None,
    ):
        self._config = config or get_default_config()
        self._profile_name = profile or "default"
        self._debug = debug
        self._quiet = quiet
        self._color = color

        profile_config = self._config.get_profile(self._profile_name)
        if timeout is not None:
            profile_config = profile_config.model_copy(
                update={"argocd": profile_config.argocd.model_copy(update={"timeout": timeout})}
            )
        self._profile = profile_config

        self._paths = self._config.paths
        if root:
            self._paths = self._paths.model_copy(update={"root": root})

        if debug:
            log_level = LogLevel.DEBUG
        elif quiet:
            log_level = LogLevel.ERROR
        else:
            log_level = self._config.global_settings.verbosity

        setup_logging(log_level, rich_output=color)
        self._logger = StructuredLogger("context")

        self._output = OutputFormatter(
            format=output_format or OutputFormat.TABLE,
            color=color,
            quiet=quiet,
        )

        self._argocd_client: ArgoCDClient | None = None

    @property
    def config(self) -> DvOpsConfig:
        """Get the loaded configuration."""
        return self._config

    @property
    def profile(self) -> ProfileConfig:
        """Get the current profile configuration."""
        return self._profile

    @property
    def profile_name(self) -> str:
        return self._profile_name

    @property
    def paths(self) -> PathsConfig:
        """Get the repository layout."""
        return self._paths

    @property
    def output(self) -> OutputFormatter:
        return self._output

    @property
    def debug(self) -> bool:
        return self._debug

    @property
    def logger(self) -> StructuredLogger:
        return self._logger

    @property
    def argocd(self) -> "ArgoCDClient":
        """Get or create the Argo CD client."""
        if self._argocd_client is None:
            from dvops.clients.argocd import ArgoCDClient

            self._argocd_client = ArgoCDClient(self.profile.argocd)
        return self._argocd_client
