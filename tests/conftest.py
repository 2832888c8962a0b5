"""Pytest fixtures for dvops tests."""

import os
import subprocess
from pathlib import Path
from typing import Generator
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from dvops.config import ArgoCDConfig, PathsConfig

PROJECT_LIST = """\
NAME     DESCRIPTION  DESTINATIONS  SOURCES  CLUSTER-RESOURCE-WHITELIST  NAMESPACE-RESOURCE-BLACKLIST  SIGNATURE-KEYS  ORPHANED-RESOURCES
default               *,*           *        */*                         <none>                        <none>          disabled
sandbox               *,*           *        <none>                      <none>                        <none>          disabled
foobar                *,*           *        <none>                      <none>                        <none>          disabled
"""

CLUSTER_LIST = """\
SERVER                          NAME        VERSION  STATUS      MESSAGE  PROJECT
https://kubernetes.default.svc  in-cluster  1.29     Successful
https://cluster-a.example.com   sandbox     1.29     Successful
https://10.0.0.1:6443           staging     1.28     Successful
"""

PROJECT_TEMPLATE = """\
apiVersion: argoproj.io/v1alpha1
kind: AppProject
metadata:
  name: {{ .project }}
  namespace: argocd
  annotations:
    argocd.argoproj.io/sync-wave: "{{ default "0" .syncWave }}"
spec:
  description: "{{ .project }} applications on {{ .destinationCluster }}"
  sourceRepos:
    - {{ .helmChartURL }}
  destinations:
    - name: {{ .destinationCluster }}
      server: {{ .destinationServer }}
      namespace: {{ .destNamespace }}
---
# generator values
project: {{ .project }}
destinationCluster: {{ .destinationCluster }}
destinationServer: {{ .destinationServer }}
syncWave: {{ default "0" .syncWave }}
appName: {{ .appName }}
userGivenName: {{ .userGivenName }}
helmChartName: {{ .helmChartName }}
helmChartVersion: {{ .helmChartVersion }}
"""


class FakeArgoCD:
    """Stands in for the argocd executable behind subprocess.run."""

    def __init__(self) -> None:
        self.outputs = {
            ("proj", "list"): PROJECT_LIST,
            ("cluster", "list"): CLUSTER_LIST,
        }
        self.returncodes: dict[tuple[str, str], int] = {}
        self.stderr: dict[tuple[str, str], str] = {}
        self.available = True
        self.calls: list[list[str]] = []
        self.envs: list[dict[str, str] | None] = []

    def which(self, name: str) -> str | None:
        return f"/usr/local/bin/{name}" if self.available else None

    def run(self, cmd: list[str], **kwargs) -> subprocess.CompletedProcess:
        self.calls.append(list(cmd))
        self.envs.append(kwargs.get("env"))
        key = (cmd[1], cmd[2])
        return subprocess.CompletedProcess(
            cmd,
            self.returncodes.get(key, 0),
            stdout=self.outputs.get(key, ""),
            stderr=self.stderr.get(key, ""),
        )

    def count(self, *subcommand: str) -> int:
        return sum(1 for c in self.calls if tuple(c[1:3]) == subcommand)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Create a Click CLI runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def clean_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Isolate each test from the caller's environment and config files."""
    for k in list(os.environ):
        if k.startswith("DVOPS_") or k.startswith("ARGOCD_"):
            monkeypatch.delenv(k)

    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(tmp_path)
    yield


@pytest.fixture
def fake_argocd() -> Generator[FakeArgoCD, None, None]:
    """Patch the argocd CLI with canned listings."""
    fake = FakeArgoCD()
    with patch("dvops.clients.argocd.shutil.which", side_effect=fake.which), \
         patch("dvops.clients.argocd.subprocess.run", side_effect=fake.run):
        yield fake


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """A dv-ops checkout with the project template in place."""
    root = tmp_path / "dv-ops"
    templates = root / "addons" / "templates"
    templates.mkdir(parents=True)
    (templates / "project-template.yaml").write_text(PROJECT_TEMPLATE)
    return root


@pytest.fixture
def paths(workspace: Path) -> PathsConfig:
    return PathsConfig(root=str(workspace))


@pytest.fixture
def argocd_config() -> ArgoCDConfig:
    return ArgoCDConfig()
