"""tidydisk - interactive disk-space reclamation tool."""

__version__ = "0.3.0"
