"""Federated karaoke catalog and lyrics search."""

__version__ = "0.1.0"
