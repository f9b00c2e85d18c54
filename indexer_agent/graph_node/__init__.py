"""Graph-node collaborators: index node discovery and deployment assignments.

Usage:
    from indexer_agent.graph_node import GraphNodeClient

    async with GraphNodeClient.from_config(settings.graph_node) as graph_node:
        nodes = await graph_node.list_nodes()
"""

from indexer_agent.graph_node.client import GraphNodeClient
from indexer_agent.graph_node.enums import SubgraphStatus
from indexer_agent.graph_node.exceptions import AssignmentNotFoundError, GraphNodeError
from indexer_agent.graph_node.models import (
    DEFAULT_TARGET_NODE,
    REMOVED_NODE_ID,
    IndexNode,
    SubgraphDeploymentAssignment,
    SubgraphDeploymentID,
)
from indexer_agent.graph_node.store import AssignmentStore, NodeDirectory
from indexer_agent.graph_node.stores.inmemory import InMemoryGraphNode

__all__ = [
    # Enums
    "SubgraphStatus",
    # Models
    "IndexNode",
    "SubgraphDeploymentAssignment",
    "SubgraphDeploymentID",
    "DEFAULT_TARGET_NODE",
    "REMOVED_NODE_ID",
    # Interfaces
    "AssignmentStore",
    "NodeDirectory",
    # Backends
    "GraphNodeClient",
    "InMemoryGraphNode",
    # Errors
    "AssignmentNotFoundError",
    "GraphNodeError",
]
