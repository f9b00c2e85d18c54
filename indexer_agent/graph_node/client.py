"""Graph-node HTTP client.

Talks to a graph-node through its indexing status GraphQL endpoint (fleet
topology, assignment status) and its admin JSON-RPC endpoint (pause and
reassign).

Usage:
    from indexer_agent.graph_node import GraphNodeClient

    async with GraphNodeClient(
        status_endpoint="http://graph-node:8030/graphql",
        admin_endpoint="http://graph-node:8020",
    ) as graph_node:
        paused = await graph_node.list_by_status(SubgraphStatus.PAUSED)
"""

from itertools import count
from typing import Any

import httpx

from indexer_agent.config.models.graph_node import GraphNodeConfig
from indexer_agent.graph_node.enums import SubgraphStatus
from indexer_agent.graph_node.exceptions import GraphNodeError
from indexer_agent.graph_node.models import (
    IndexNode,
    SubgraphDeploymentAssignment,
    SubgraphDeploymentID,
)
from indexer_agent.graph_node.store import AssignmentStore, NodeDirectory
from indexer_agent.observability.logging import get_logger

logger = get_logger(__name__)

INDEXING_STATUSES_QUERY = """
{
  indexingStatuses {
    subgraphDeployment: subgraph
    node
    paused
  }
}
"""


class GraphNodeClient(NodeDirectory, AssignmentStore):
    """Async client for a graph-node's status and admin endpoints."""

    def __init__(
        self,
        status_endpoint: str = "http://localhost:8030/graphql",
        admin_endpoint: str = "http://localhost:8020",
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize the client.

        Args:
            status_endpoint: Indexing status GraphQL endpoint
            admin_endpoint: Admin JSON-RPC endpoint
            timeout: Request timeout in seconds
            transport: Optional httpx transport, used to stub the graph-node
        """
        self.status_endpoint = status_endpoint
        self.admin_endpoint = admin_endpoint.rstrip("/")
        self._client = httpx.AsyncClient(timeout=timeout, transport=transport)
        self._request_ids = count(1)

    @classmethod
    def from_config(
        cls,
        config: GraphNodeConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "GraphNodeClient":
        """Create a client from graph-node configuration."""
        return cls(
            status_endpoint=config.status_endpoint,
            admin_endpoint=config.admin_endpoint,
            timeout=config.timeout_seconds,
            transport=transport,
        )

    async def __aenter__(self) -> "GraphNodeClient":
        return self

    async def __aexit__(self, *args) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def _post(self, url: str, payload: dict[str, Any]) -> dict[str, Any]:
        """POST a JSON payload and decode the JSON response."""
        try:
            response = await self._client.post(url, json=payload)
        except httpx.HTTPError as e:
            raise GraphNodeError(f"Failed to reach graph-node at {url}: {e}") from e

        if response.status_code >= 400:
            raise GraphNodeError(
                message=f"graph-node returned HTTP {response.status_code}: {response.text}",
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as e:
            raise GraphNodeError(
                f"graph-node returned invalid JSON from {url}",
                status_code=response.status_code,
                details=response.text,
            ) from e

    async def _indexing_statuses(self) -> list[dict[str, Any]]:
        """Query the status endpoint for every deployment's node and pause state."""
        data = await self._post(self.status_endpoint, {"query": INDEXING_STATUSES_QUERY})

        if data.get("errors"):
            raise GraphNodeError(
                "Failed to query indexing statuses",
                details=data["errors"],
            )
        return (data.get("data") or {}).get("indexingStatuses") or []

    async def _admin_call(self, method: str, params: dict[str, Any]) -> Any:
        """Invoke an admin JSON-RPC method."""
        payload = {
            "jsonrpc": "2.0",
            "id": next(self._request_ids),
            "method": method,
            "params": params,
        }
        data = await self._post(self.admin_endpoint, payload)

        error = data.get("error")
        if error:
            message = error.get("message", str(error)) if isinstance(error, dict) else str(error)
            raise GraphNodeError(f"{method} failed: {message}", details=error)
        return data.get("result")

    async def fetch_index_nodes(self) -> list[IndexNode]:
        """Group deployments by index node, in the order nodes are first seen."""
        nodes: dict[str, IndexNode] = {}
        for status in await self._indexing_statuses():
            node_id = status.get("node") or ""
            node = nodes.setdefault(node_id, IndexNode(id=node_id))
            node.deployments.append(
                SubgraphDeploymentID(ipfs_hash=status["subgraphDeployment"])
            )

        logger.debug("index_nodes_fetched", node_count=len(nodes))
        return list(nodes.values())

    async def list_by_status(
        self, status: SubgraphStatus
    ) -> list[SubgraphDeploymentAssignment]:
        """List assignments with the given status in the order graph-node reports them.

        Deployments on the removed node are listed as paused even when
        graph-node's paused flag is unset.
        """
        assignments = []
        for entry in await self._indexing_statuses():
            assignment = SubgraphDeploymentAssignment(
                id=SubgraphDeploymentID(ipfs_hash=entry["subgraphDeployment"]),
                node=entry.get("node") or "",
                status=SubgraphStatus.PAUSED if entry.get("paused") else SubgraphStatus.ACTIVE,
            )
            if assignment.listed_status != status:
                continue
            assignment.status = status
            assignments.append(assignment)
        return assignments

    async def pause(self, deployment: SubgraphDeploymentID) -> None:
        """Pause a deployment through the admin API."""
        try:
            await self._admin_call("subgraph_pause", {"deployment": deployment.ipfs_hash})
        except GraphNodeError as e:
            if "already paused" not in e.message.lower():
                raise
            logger.warning("deployment_already_paused", deployment=str(deployment))

    async def reassign(self, deployment: SubgraphDeploymentID, node_id: str) -> None:
        """Reassign a deployment to node_id through the admin API.

        graph-node rejects a reassignment to the current node as unchanged,
        which is treated as success.
        """
        try:
            await self._admin_call(
                "subgraph_reassign",
                {"ipfs_hash": deployment.ipfs_hash, "node_id": node_id},
            )
        except GraphNodeError as e:
            if "unchanged" not in e.message.lower():
                raise
            logger.debug(
                "deployment_assignment_unchanged",
                deployment=str(deployment),
                node_id=node_id,
            )
