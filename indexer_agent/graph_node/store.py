"""NodeDirectory and AssignmentStore abstract interfaces."""

from abc import ABC, abstractmethod

from indexer_agent.graph_node.enums import SubgraphStatus
from indexer_agent.graph_node.models import (
    IndexNode,
    SubgraphDeploymentAssignment,
    SubgraphDeploymentID,
)


class NodeDirectory(ABC):
    """Abstract interface for discovering the index node fleet.

    Implementations only report what the graph-node knows; filtering of
    removed nodes happens in list_nodes.
    """

    @abstractmethod
    async def fetch_index_nodes(self) -> list[IndexNode]:
        """Fetch every index node known to the graph-node, unfiltered."""
        pass

    async def list_nodes(self) -> list[IndexNode]:
        """List live index nodes, preserving the reported order.

        Nodes with an empty id or tagged as removed are excluded.
        """
        return [node for node in await self.fetch_index_nodes() if node.is_live]


class AssignmentStore(ABC):
    """Abstract interface for subgraph deployment assignments.

    Every mutation targets a single deployment and is committed on its own.
    """

    @abstractmethod
    async def list_by_status(
        self, status: SubgraphStatus
    ) -> list[SubgraphDeploymentAssignment]:
        """List assignments with the given status in store order.

        Assignments on the removed node are always listed as PAUSED.
        """
        pass

    @abstractmethod
    async def pause(self, deployment: SubgraphDeploymentID) -> None:
        """Mark a deployment as paused. Pausing a paused deployment is a no-op."""
        pass

    @abstractmethod
    async def reassign(self, deployment: SubgraphDeploymentID, node_id: str) -> None:
        """Assign a deployment to node_id, keeping its status."""
        pass
