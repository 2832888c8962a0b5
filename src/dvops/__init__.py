"""dvops - Argo CD project file generator for the dv-ops repository."""

__version__ = "0.1.0"
