"""Tests for project and cluster existence checks."""

import pytest

from dvops.clients.argocd import parse_clusters, parse_projects
from dvops.core.exceptions import NotFoundError
from dvops.project.models import ClusterRecord, ProjectRecord
from dvops.project.validator import (
    cluster_exists,
    project_exists,
    require_cluster,
    require_project,
)

from tests.conftest import CLUSTER_LIST, PROJECT_LIST


@pytest.fixture
def projects():
    return parse_projects(PROJECT_LIST)


@pytest.fixture
def clusters():
    return parse_clusters(CLUSTER_LIST)


class TestProjectExists:
    def test_exact_match(self, projects):
        assert project_exists("sandbox", projects)
        assert project_exists("default", projects)

    def test_prefix_does_not_match(self, projects):
        # "foobar" is registered, "foo" is not
        assert not project_exists("foo", projects)

    def test_case_sensitive(self, projects):
        assert not project_exists("Sandbox", projects)

    def test_header_is_not_a_project(self, projects):
        assert not project_exists("NAME", projects)

    def test_description_column_is_ignored(self):
        records = [ProjectRecord(name="web", fields={"name": "web", "description": "sandbox"})]
        assert not project_exists("sandbox", records)

    def test_empty_listing(self):
        assert not project_exists("sandbox", [])


class TestClusterExists:
    def test_matches_name_column(self, clusters):
        assert cluster_exists("sandbox", clusters)
        assert cluster_exists("in-cluster", clusters)

    def test_server_column_is_not_a_name(self, clusters):
        assert not cluster_exists("https://cluster-a.example.com", clusters)

    def test_name_inside_server_url_does_not_match(self):
        records = [ClusterRecord(server="https://sandbox.example.com", name="prod")]
        assert not cluster_exists("sandbox", records)

    def test_partial_name(self, clusters):
        assert not cluster_exists("stag", clusters)


class TestRequire:
    def test_require_project_passes(self, projects):
        require_project("sandbox", projects)

    def test_require_project_not_found(self, projects):
        with pytest.raises(NotFoundError) as exc:
            require_project("webapp", projects)
        assert exc.value.kind == "project"
        assert exc.value.name == "webapp"
        assert "argocd proj create webapp" in exc.value.hint

    def test_require_project_suggests_close_name(self, projects):
        with pytest.raises(NotFoundError) as exc:
            require_project("sandbx", projects)
        assert "Did you mean" in exc.value.hint
        assert "sandbox" in exc.value.hint

    def test_require_cluster_not_found(self, clusters):
        with pytest.raises(NotFoundError) as exc:
            require_cluster("production", clusters)
        assert exc.value.kind == "cluster"
        assert "argocd cluster add production" in exc.value.hint
        assert str(exc.value) == "Cluster 'production' does not exist in ArgoCD"
