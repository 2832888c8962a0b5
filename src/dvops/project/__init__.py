"""Generation of Argo CD project files from the repository template."""

from dvops.project.models import (
    ClusterRecord,
    ClusterRef,
    PipelineState,
    ProjectRecord,
    UpdateRequest,
    UpdateResult,
)

__all__ = [
    "ClusterRecord",
    "ClusterRef",
    "PipelineState",
    "ProjectRecord",
    "UpdateRequest",
    "UpdateResult",
]
