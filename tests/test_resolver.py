"""Tests for server URL resolution."""

import pytest

from dvops.clients.argocd import parse_clusters
from dvops.core.exceptions import ResolutionFailedError
from dvops.project.models import ClusterRecord
from dvops.project.resolver import resolve_server_url

from tests.conftest import CLUSTER_LIST


class TestResolveServerURL:
    def test_resolves_matching_row(self):
        clusters = parse_clusters(CLUSTER_LIST)
        assert resolve_server_url("sandbox", clusters) == "https://cluster-a.example.com"
        assert resolve_server_url("staging", clusters) == "https://10.0.0.1:6443"

    def test_first_matching_row_wins(self):
        clusters = [
            ClusterRecord(server="https://first.example.com", name="dup"),
            ClusterRecord(server="https://second.example.com", name="dup"),
        ]
        assert resolve_server_url("dup", clusters) == "https://first.example.com"

    def test_missing_cluster(self):
        clusters = parse_clusters(CLUSTER_LIST)
        with pytest.raises(ResolutionFailedError) as exc:
            resolve_server_url("production", clusters)
        assert exc.value.cluster_name == "production"

    def test_substring_of_server_does_not_resolve(self):
        clusters = [ClusterRecord(server="https://sandbox.example.com", name="prod")]
        with pytest.raises(ResolutionFailedError):
            resolve_server_url("sandbox", clusters)

    def test_empty_server_fails(self):
        with pytest.raises(ResolutionFailedError):
            resolve_server_url("blank", [ClusterRecord(server="", name="blank")])

    def test_empty_listing(self):
        with pytest.raises(ResolutionFailedError):
            resolve_server_url("sandbox", [])
