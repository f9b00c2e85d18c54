"""Shared fixtures for migration tests."""

import pytest

from indexer_agent.graph_node.enums import SubgraphStatus
from indexer_agent.graph_node.models import REMOVED_NODE_ID
from indexer_agent.graph_node.stores import InMemoryGraphNode


@pytest.fixture
def graph_node() -> InMemoryGraphNode:
    """Fleet of two nodes, A with five deployments and B with two.

    w1 is virtually paused on "removed", w2 is paused in place on A.
    """
    graph_node = InMemoryGraphNode()
    graph_node.register_node("A")
    graph_node.register_node("B")
    graph_node.add_assignment("w1", REMOVED_NODE_ID, SubgraphStatus.PAUSED)
    graph_node.add_assignment("w2", "A", SubgraphStatus.PAUSED)
    for i in range(4):
        graph_node.add_assignment(f"a{i}", "A")
    graph_node.add_assignment("b0", "B")
    graph_node.add_assignment("b1", "B")
    return graph_node


@pytest.fixture
def virtually_paused_graph_node() -> InMemoryGraphNode:
    """Three virtually paused deployments and one live node."""
    graph_node = InMemoryGraphNode()
    graph_node.add_assignment("a0", "index_node_0")
    for name in ("v1", "v2", "v3"):
        graph_node.add_assignment(name, REMOVED_NODE_ID, SubgraphStatus.PAUSED)
    return graph_node


@pytest.fixture
def snapshot():
    """Node and status of each named deployment in a graph-node."""

    def _snapshot(
        graph_node: InMemoryGraphNode, *names: str
    ) -> dict[str, tuple[str, SubgraphStatus]]:
        result = {}
        for name in names:
            assignment = graph_node.get_assignment(name)
            result[name] = (assignment.node, assignment.status)
        return result

    return _snapshot
