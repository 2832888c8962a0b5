"""Clients for external services."""

from dvops.clients.argocd import ArgoCDClient

__all__ = ["ArgoCDClient"]
