"""Cluster name to API server URL resolution."""

from typing import Sequence

from dvops.core.exceptions import ResolutionFailedError
from dvops.project.models import ClusterRecord


def resolve_server_url(cluster_name: str, records: Sequence[ClusterRecord]) -> str:
    """Return the server URL of the first row whose name equals ``cluster_name``.

    Raises:
        ResolutionFailedError: If no row matches or the matching row has an
            empty server column
    """
    for record in records:
        if record.name == cluster_name:
            if not record.server:
                break
            return record.server
    raise ResolutionFailedError(cluster_name)
