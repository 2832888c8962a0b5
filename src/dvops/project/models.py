"""Data models for the project update pipeline."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class PipelineState(str, Enum):
    """States of a project update run."""

    START = "start"
    ARGS_VALIDATED = "args_validated"
    TOOL_AVAILABLE = "tool_available"
    PROJECT_VALIDATED = "project_validated"
    CLUSTER_VALIDATED = "cluster_validated"
    FILE_REMOVED = "file_removed"
    NO_FILE_TO_REMOVE = "no_file_to_remove"
    SERVER_RESOLVED = "server_resolved"
    RENDERED = "rendered"
    WRITTEN = "written"
    DONE = "done"
    FAILED = "failed"


@dataclass(frozen=True)
class ProjectRecord:
    """One data row of ``argocd proj list``; ``fields`` keeps every column."""

    name: str
    fields: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return dict(self.fields) or {"name": self.name}


@dataclass(frozen=True)
class ClusterRecord:
    """One data row of ``argocd cluster list``.

    The listing prints the server URL first and the cluster name second.
    """

    server: str
    name: str
    fields: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return dict(self.fields) or {"server": self.server, "name": self.name}


@dataclass(frozen=True)
class UpdateRequest:
    """Inputs for one run, built once from the command line."""

    project_name: str
    cluster_name: str


@dataclass
class ClusterRef:
    """A validated cluster and, once resolved, its API server URL."""

    name: str
    server: str | None = None


@dataclass
class UpdateResult:
    """Outcome of a project update run."""

    project_name: str
    cluster: ClusterRef
    output_path: str
    removed_existing: bool = False
    states: list[PipelineState] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "project": self.project_name,
            "cluster": self.cluster.name,
            "server": self.cluster.server,
            "output_path": self.output_path,
            "removed_existing": self.removed_existing,
            "states": [s.value for s in self.states],
        }
