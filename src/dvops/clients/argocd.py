"""Argo CD registry client driving the ``argocd`` CLI."""

import os
import shutil
import subprocess

from dvops.config import ArgoCDConfig
from dvops.core.exceptions import QueryFailedError, ToolUnavailableError
from dvops.core.logging import StructuredLogger
from dvops.core.utils import split_columns, split_listing
from dvops.project.models import ClusterRecord, ProjectRecord

INSTALL_HINT = (
    "Installation instructions:\n"
    "  - macOS: brew install argocd\n"
    "  - Linux: curl -sSL -o /usr/local/bin/argocd "
    "https://github.com/argoproj/argo-cd/releases/latest/download/argocd-linux-amd64"
)


def parse_projects(text: str) -> list[ProjectRecord]:
    """Parse ``argocd proj list`` output; the name is the first column."""
    header, lines = split_listing(text)
    return [ProjectRecord(name=line.split()[0], fields=split_columns(header, line)) for line in lines]


def parse_clusters(text: str) -> list[ClusterRecord]:
    """Parse ``argocd cluster list`` output.

    The server URL is the first column and the cluster name the second.

    Raises:
        QueryFailedError: If a data row has fewer than two columns
    """
    header, lines = split_listing(text)
    records = []
    for line in lines:
        row = line.split()
        if len(row) < 2:
            raise QueryFailedError(
                "Unparseable row in 'argocd cluster list' output",
                details={"row": line.strip()},
            )
        records.append(ClusterRecord(server=row[0], name=row[1], fields=split_columns(header, line)))
    return records


class ArgoCDClient:
    """Client for the Argo CD registry of projects and clusters.

    Each listing is fetched at most once per client; a run builds one
    client, so repeated lookups reuse the first response.
    """

    def __init__(self, config: ArgoCDConfig):
        self._config = config
        self._listings: dict[tuple[str, ...], str] = {}
        self._logger = StructuredLogger("argocd")

    @property
    def binary(self) -> str:
        return self._config.get_binary()

    def ensure_available(self) -> str:
        """Check the argocd CLI is on PATH.

        Returns:
            Absolute path of the executable

        Raises:
            ToolUnavailableError: If the executable cannot be found
        """
        self._logger.debug("Validating ArgoCD CLI availability", binary=self.binary)
        path = shutil.which(self.binary)
        if not path:
            raise ToolUnavailableError("ArgoCD", hint=INSTALL_HINT)
        return path

    def _connection_args(self) -> list[str]:
        args: list[str] = []
        server = self._config.get_server()
        if server:
            args.extend(["--server", server])
        if self._config.grpc_web:
            args.append("--grpc-web")
        if self._config.insecure:
            args.append("--insecure")
        return args

    def _environment(self) -> dict[str, str] | None:
        """Child environment carrying the auth token, kept off the command line."""
        token = self._config.get_auth_token()
        if not token:
            return None
        return {**os.environ, "ARGOCD_AUTH_TOKEN": token}

    def _run(self, *args: str) -> str:
        """Run an argocd subcommand and return its stdout."""
        cmd = [self.binary, *args, *self._connection_args()]
        timeout = self._config.timeout
        self._logger.debug("Executing", command=" ".join([self.binary, *args]), timeout=timeout)

        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=timeout,
                env=self._environment(),
            )
        except FileNotFoundError:
            raise ToolUnavailableError("ArgoCD", hint=INSTALL_HINT)
        except subprocess.TimeoutExpired:
            raise QueryFailedError(
                f"'argocd {' '.join(args)}' timed out after {timeout}s",
                command=cmd,
            )

        if result.returncode != 0:
            self._logger.debug("Command failed", returncode=result.returncode, stderr=result.stderr.strip())
            raise QueryFailedError(
                f"'argocd {' '.join(args)}' failed. Check your ArgoCD connection.",
                command=cmd,
                returncode=result.returncode,
                details={"stderr": result.stderr.strip()} if result.stderr.strip() else None,
            )

        if not result.stdout.strip():
            raise QueryFailedError(
                f"'argocd {' '.join(args)}' returned no output",
                command=cmd,
                returncode=result.returncode,
            )

        return result.stdout

    def _listing(self, *args: str) -> str:
        if args not in self._listings:
            self._listings[args] = self._run(*args)
        else:
            self._logger.debug("Reusing cached listing", command=" ".join(args))
        return self._listings[args]

    def list_projects(self) -> list[ProjectRecord]:
        """List all projects registered in Argo CD."""
        return parse_projects(self._listing("proj", "list"))

    def list_clusters(self) -> list[ClusterRecord]:
        """List all clusters registered in Argo CD."""
        return parse_clusters(self._listing("cluster", "list"))
