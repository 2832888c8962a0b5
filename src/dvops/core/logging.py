"""Logging configuration for dvops."""

import logging
import sys
from enum import Enum
from typing import Any, MutableMapping

from rich.console import Console
from rich.logging import RichHandler

# Keyword arguments understood by logging itself; everything else is context.
_LOGGING_KWARGS = frozenset({"exc_info", "stack_info", "stacklevel", "extra"})


class LogLevel(str, Enum):
    """Verbosity accepted in the ``global.verbosity`` config key."""

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"

    @property
    def numeric(self) -> int:
        return logging.getLevelName(self.name)


def setup_logging(level: LogLevel = LogLevel.WARNING, rich_output: bool = True) -> None:
    """Route log records to stderr at the given verbosity.

    Diagnostics go to stderr so listings printed on stdout stay clean.
    With ``rich_output`` off a plain timestamped format is used instead.
    """
    if rich_output:
        handler: logging.Handler = RichHandler(
            console=Console(stderr=True),
            show_path=False,
            rich_tracebacks=True,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
    else:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s", datefmt="%H:%M:%S")
        )

    root = logging.getLogger()
    for existing in root.handlers[:]:
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(level.numeric)
    logging.getLogger("dvops").setLevel(level.numeric)


class StructuredLogger(logging.LoggerAdapter):
    """Logger for one dvops component that appends ``key=value`` context.

    Example:
        log = StructuredLogger("pipeline").bind(project="sandbox")
        log.debug("Rendering template", template=path)
        # Rendering template [project=sandbox template=...]
    """

    def __init__(self, component: str, **context: Any):
        super().__init__(logging.getLogger(f"dvops.{component}"), context)
        self.component = component

    def bind(self, **context: Any) -> "StructuredLogger":
        """Return a logger for the same component with extra context."""
        return StructuredLogger(self.component, **{**self.extra, **context})

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> tuple[Any, MutableMapping[str, Any]]:
        context = dict(self.extra)
        for key in [k for k in kwargs if k not in _LOGGING_KWARGS]:
            context[key] = kwargs.pop(key)
        if context:
            msg = f"{msg} [{' '.join(f'{k}={v}' for k, v in context.items())}]"
        return msg, kwargs
