"""Enums for graph-node domain."""

from enum import Enum


class SubgraphStatus(str, Enum):
    """Status of a subgraph deployment assignment.

    ACTIVE deployments are indexed by their assigned node, PAUSED
    deployments keep their assignment but are not indexed.
    """

    ACTIVE = "active"
    PAUSED = "paused"
