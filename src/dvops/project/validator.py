"""Existence checks for projects and clusters."""

from typing import Sequence

from dvops.core.exceptions import NotFoundError
from dvops.core.suggestions import format_suggestions, suggest_names
from dvops.project.models import ClusterRecord, ProjectRecord


def project_exists(name: str, records: Sequence[ProjectRecord]) -> bool:
    """Return True if a project row carries exactly this name."""
    return any(record.name == name for record in records)


def cluster_exists(name: str, records: Sequence[ClusterRecord]) -> bool:
    """Return True if a cluster row carries exactly this name.

    Only the name column is compared; a server URL containing the name
    does not count.
    """
    return any(record.name == name for record in records)


def _not_found(kind: str, name: str, known: list[str], verb: str, command: str) -> NotFoundError:
    lines = [f"You can {verb} the {kind} with:", f"  {command}"]
    suggestion = format_suggestions(suggest_names(name, known))
    if suggestion:
        lines.insert(0, suggestion)
    return NotFoundError(kind, name, hint="\n".join(lines))


def require_project(name: str, records: Sequence[ProjectRecord]) -> None:
    """Raise NotFoundError unless the project is registered."""
    if not project_exists(name, records):
        raise _not_found(
            "project",
            name,
            [r.name for r in records],
            "create",
            f"argocd proj create {name}",
        )


def require_cluster(name: str, records: Sequence[ClusterRecord]) -> None:
    """Raise NotFoundError unless the cluster is registered."""
    if not cluster_exists(name, records):
        raise _not_found(
            "cluster",
            name,
            [r.name for r in records],
            "add",
            f"argocd cluster add {name}",
        )
