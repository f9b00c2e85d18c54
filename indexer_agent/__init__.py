"""Indexer agent: placement migrations for graph-node index node fleets."""

__version__ = "0.1.0"
