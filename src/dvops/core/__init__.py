"""Core utilities and shared components for dvops."""

# Import context lazily to avoid circular imports:
# from dvops.core.context import DvOpsContext
from dvops.core.exceptions import (
    ConfigError,
    DvOpsError,
    MissingArgumentError,
    NotFoundError,
    QueryFailedError,
    RenderEmptyError,
    ResolutionFailedError,
    TemplateNotFoundError,
    TemplateUnreadableError,
    ToolUnavailableError,
    UnknownArgumentError,
    WriteFailedError,
)
from dvops.core.output import OutputFormatter

__all__ = [
    "ConfigError",
    "DvOpsError",
    "MissingArgumentError",
    "NotFoundError",
    "QueryFailedError",
    "RenderEmptyError",
    "ResolutionFailedError",
    "TemplateNotFoundError",
    "TemplateUnreadableError",
    "ToolUnavailableError",
    "UnknownArgumentError",
    "WriteFailedError",
    "OutputFormatter",
]
