"""Graph-node backends."""

from indexer_agent.graph_node.store import AssignmentStore, NodeDirectory
from indexer_agent.graph_node.stores.inmemory import InMemoryGraphNode

__all__ = [
    "AssignmentStore",
    "NodeDirectory",
    "InMemoryGraphNode",
]
