"""The project update pipeline.

Validates that the project and cluster are registered in Argo CD, removes
any stale project file, resolves the cluster's API server and renders the
project template into ``<projects_dir>/<project>.yaml``. Every failure
aborts the run; nothing already done (such as removing the old file) is
rolled back.
"""

from dvops.clients.argocd import ArgoCDClient
from dvops.config import PathsConfig
from dvops.core.exceptions import DvOpsError, MissingArgumentError
from dvops.core.logging import StructuredLogger
from dvops.core.output import OutputFormatter
from dvops.project import files
from dvops.project.models import ClusterRef, PipelineState, UpdateRequest, UpdateResult
from dvops.project.renderer import build_substitutions, render_file
from dvops.project.resolver import resolve_server_url
from dvops.project.validator import require_cluster, require_project


def validate_request(request: UpdateRequest) -> None:
    """Raise MissingArgumentError if either name is empty."""
    if not request.project_name or not request.project_name.strip():
        raise MissingArgumentError("--project-name")
    if not request.cluster_name or not request.cluster_name.strip():
        raise MissingArgumentError("--cluster-name")


class ProjectUpdater:
    """Runs one project update against an Argo CD client and a repo layout."""

    def __init__(
        self,
        client: ArgoCDClient,
        paths: PathsConfig,
        output: OutputFormatter | None = None,
    ):
        self._client = client
        self._paths = paths
        self._output = output or OutputFormatter(color=False, quiet=True)
        self._logger = StructuredLogger("pipeline")
        self.states: list[PipelineState] = []

    @property
    def state(self) -> PipelineState:
        """Current pipeline state."""
        return self.states[-1] if self.states else PipelineState.START

    def _advance(self, state: PipelineState) -> None:
        self.states.append(state)
        self._logger.debug("Pipeline state", state=state.value)

    def run(self, request: UpdateRequest) -> UpdateResult:
        """Run the pipeline.

        Raises:
            DvOpsError: Any validation, resolution, render or write failure.
                The updater is left in the FAILED state.
        """
        self.states = [PipelineState.START]
        try:
            return self._run(request)
        except DvOpsError as e:
            self._logger.debug("Pipeline failed", after=self.state.value, error=type(e).__name__)
            self._advance(PipelineState.FAILED)
            raise

    def _run(self, request: UpdateRequest) -> UpdateResult:
        log = self._logger.bind(project=request.project_name, cluster=request.cluster_name)

        validate_request(request)
        self._advance(PipelineState.ARGS_VALIDATED)

        self._output.print_info("Starting ArgoCD project creation process...")
        log.debug("Repository layout", root=self._paths.get_root())

        self._client.ensure_available()
        self._output.print_success("ArgoCD CLI found")
        self._advance(PipelineState.TOOL_AVAILABLE)

        log.debug("Checking if project exists in ArgoCD")
        require_project(request.project_name, self._client.list_projects())
        self._output.print_success(f"Project '{request.project_name}' found in ArgoCD")
        self._advance(PipelineState.PROJECT_VALIDATED)

        log.debug("Checking if cluster exists in ArgoCD")
        clusters = self._client.list_clusters()
        require_cluster(request.cluster_name, clusters)
        self._output.print_success(f"Cluster '{request.cluster_name}' found in ArgoCD")
        self._advance(PipelineState.CLUSTER_VALIDATED)

        project_file = self._paths.project_file(request.project_name)
        if project_file.is_file():
            self._output.print_info(f"Found existing project file: {project_file}")
        else:
            self._output.print_warning(f"Project file does not exist: {project_file}")
        removed = files.ensure_clean(project_file)
        if removed:
            self._output.print_success(f"Removed existing project file: {project_file}")
            self._advance(PipelineState.FILE_REMOVED)
        else:
            self._advance(PipelineState.NO_FILE_TO_REMOVE)

        cluster = ClusterRef(name=request.cluster_name)
        cluster.server = resolve_server_url(cluster.name, clusters)
        log.debug("Resolved destination server", server=cluster.server)
        self._advance(PipelineState.SERVER_RESOLVED)

        template = self._paths.template_path()
        log.debug("Rendering template", template=template)
        content = render_file(
            template,
            build_substitutions(request.project_name, cluster.name, cluster.server),
        )
        self._advance(PipelineState.RENDERED)

        files.write(project_file, content)
        self._output.print_success(f"Created project file: {project_file}")
        self._advance(PipelineState.WRITTEN)

        self._advance(PipelineState.DONE)
        return UpdateResult(
            project_name=request.project_name,
            cluster=cluster,
            output_path=str(project_file),
            removed_existing=removed,
            states=list(self.states),
        )
