"""Custom exceptions for dvops."""

from typing import Any


class DvOpsError(Exception):
    """Base exception for all dvops errors."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
        hint: str | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.hint = hint

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} - {self.details}"
        return self.message


class ConfigError(DvOpsError):
    """Configuration-related errors."""

    pass


class MissingArgumentError(DvOpsError):
    """A required command-line argument was not supplied."""

    def __init__(self, argument: str):
        super().__init__(f"Missing required argument: {argument}")
        self.argument = argument


class UnknownArgumentError(DvOpsError):
    """An unrecognised command-line argument was supplied."""

    def __init__(self, argument: str, hint: str | None = None):
        super().__init__(f"Unknown argument: {argument}", hint=hint)
        self.argument = argument


class ToolUnavailableError(DvOpsError):
    """The external CLI binary cannot be found."""

    def __init__(self, tool: str, hint: str | None = None):
        super().__init__(f"{tool} CLI not found. Please install {tool} CLI first.", hint=hint)
        self.tool = tool


class QueryFailedError(DvOpsError):
    """An external listing command failed or produced no output."""

    def __init__(
        self,
        message: str,
        command: list[str] | None = None,
        returncode: int | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, details)
        self.command = command or []
        self.returncode = returncode


class NotFoundError(DvOpsError):
    """A project or cluster is not registered in Argo CD."""

    def __init__(self, kind: str, name: str, hint: str | None = None):
        super().__init__(f"{kind.capitalize()} '{name}' does not exist in ArgoCD", hint=hint)
        self.kind = kind
        self.name = name


class ResolutionFailedError(DvOpsError):
    """No server URL could be resolved for a cluster."""

    def __init__(self, cluster_name: str):
        super().__init__(
            f"Could not resolve server URL for cluster '{cluster_name}' from 'argocd cluster list'"
        )
        self.cluster_name = cluster_name


class TemplateNotFoundError(DvOpsError):
    """The project template file is missing or cannot be read."""

    def __init__(self, path: str, details: dict[str, Any] | None = None):
        super().__init__(f"Project template not found: {path}", details=details)
        self.path = path


class TemplateUnreadableError(DvOpsError):
    """The project template exists but cannot be decoded as UTF-8 text."""

    def __init__(self, path: str, details: dict[str, Any] | None = None):
        super().__init__(
            f"Project template is not valid UTF-8: {path}",
            details=details,
            hint="Re-save the template with UTF-8 encoding.",
        )
        self.path = path


class RenderEmptyError(DvOpsError):
    """Rendering produced an empty document."""

    def __init__(self, path: str):
        super().__init__(f"Rendered project file would be empty: {path}")
        self.path = path


class WriteFailedError(DvOpsError):
    """Removing or writing the project file failed."""

    def __init__(self, message: str, path: str, details: dict[str, Any] | None = None):
        super().__init__(message, details)
        self.path = path
