"""In-memory implementation of NodeDirectory and AssignmentStore."""

from indexer_agent.graph_node.enums import SubgraphStatus
from indexer_agent.graph_node.exceptions import AssignmentNotFoundError, GraphNodeError
from indexer_agent.graph_node.models import (
    IndexNode,
    SubgraphDeploymentAssignment,
    SubgraphDeploymentID,
)
from indexer_agent.graph_node.store import AssignmentStore, NodeDirectory
from indexer_agent.observability.logging import get_logger

logger = get_logger(__name__)


class InMemoryGraphNode(NodeDirectory, AssignmentStore):
    """In-memory graph-node for testing and development.

    Index nodes are derived from the assignments, so reassigning a
    deployment moves it between nodes the same way a real graph-node would.
    Nodes registered with register_node are reported even when empty.
    """

    def __init__(self) -> None:
        """Initialize empty storage."""
        self._node_ids: list[str] = []
        # Insertion order is the store's natural order
        self._assignments: dict[SubgraphDeploymentID, SubgraphDeploymentAssignment] = {}
        self._failures: dict[tuple[SubgraphDeploymentID, str], Exception] = {}
        self.calls: list[tuple[str, str, str | None]] = []

    def register_node(self, node_id: str) -> None:
        """Register an index node that may have no deployments yet."""
        if node_id not in self._node_ids:
            self._node_ids.append(node_id)

    def add_assignment(
        self,
        deployment: SubgraphDeploymentID | str,
        node: str,
        status: SubgraphStatus = SubgraphStatus.ACTIVE,
    ) -> SubgraphDeploymentAssignment:
        """Create the assignment record for a new deployment."""
        if isinstance(deployment, str):
            deployment = SubgraphDeploymentID(ipfs_hash=deployment)
        if deployment in self._assignments:
            raise ValueError(f"Deployment {deployment} is already assigned")

        self.register_node(node)
        assignment = SubgraphDeploymentAssignment(id=deployment, node=node, status=status)
        self._assignments[deployment] = assignment
        return assignment

    def get_assignment(
        self, deployment: SubgraphDeploymentID | str
    ) -> SubgraphDeploymentAssignment | None:
        """Get a copy of the assignment record for a deployment."""
        if isinstance(deployment, str):
            deployment = SubgraphDeploymentID(ipfs_hash=deployment)
        assignment = self._assignments.get(deployment)
        return assignment.model_copy() if assignment else None

    def fail_on(
        self,
        deployment: SubgraphDeploymentID | str,
        operation: str,
        error: Exception | None = None,
    ) -> None:
        """Make the next pause/reassign of a deployment raise."""
        if isinstance(deployment, str):
            deployment = SubgraphDeploymentID(ipfs_hash=deployment)
        self._failures[(deployment, operation)] = error or GraphNodeError(
            f"Injected {operation} failure for {deployment}"
        )

    async def fetch_index_nodes(self) -> list[IndexNode]:
        """Fetch every index node, including ones tagged removed."""
        self.calls.append(("fetch_index_nodes", "", None))
        nodes = {node_id: IndexNode(id=node_id) for node_id in self._node_ids}
        for assignment in self._assignments.values():
            nodes[assignment.node].deployments.append(assignment.id)
        return list(nodes.values())

    async def list_by_status(
        self, status: SubgraphStatus
    ) -> list[SubgraphDeploymentAssignment]:
        """List assignments with the given status in insertion order.

        Assignments on the removed node are listed as paused whatever
        their stored status.
        """
        self.calls.append(("list_by_status", status.value, None))
        return [
            assignment.model_copy(update={"status": status})
            for assignment in self._assignments.values()
            if assignment.listed_status == status
        ]

    async def pause(self, deployment: SubgraphDeploymentID) -> None:
        """Mark a deployment as paused."""
        self.calls.append(("pause", str(deployment), None))
        assignment = self._get_for_update(deployment, "pause")

        if assignment.status == SubgraphStatus.PAUSED:
            logger.warning("deployment_already_paused", deployment=str(deployment))
            return
        assignment.status = SubgraphStatus.PAUSED

    async def reassign(self, deployment: SubgraphDeploymentID, node_id: str) -> None:
        """Assign a deployment to node_id, keeping its status."""
        self.calls.append(("reassign", str(deployment), node_id))
        assignment = self._get_for_update(deployment, "reassign")

        if assignment.node == node_id:
            return
        self.register_node(node_id)
        assignment.node = node_id

    def _get_for_update(
        self, deployment: SubgraphDeploymentID, operation: str
    ) -> SubgraphDeploymentAssignment:
        failure = self._failures.pop((deployment, operation), None)
        if failure is not None:
            raise failure

        assignment = self._assignments.get(deployment)
        if assignment is None:
            raise AssignmentNotFoundError(deployment)
        return assignment
