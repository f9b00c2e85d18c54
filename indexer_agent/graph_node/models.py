"""Graph-node domain models.

Contains the Pydantic models for index nodes and subgraph deployment
assignments as reported by a graph-node.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from indexer_agent.graph_node.enums import SubgraphStatus

# Legacy virtual-pause node id. Also the tag graph-node uses for nodes that
# have been removed from the fleet.
REMOVED_NODE_ID = "removed"

# Target used when no live index node is available
DEFAULT_TARGET_NODE = "default"


class SubgraphDeploymentID(BaseModel):
    """Content-addressed identifier of a subgraph deployment."""

    model_config = ConfigDict(frozen=True)

    ipfs_hash: str = Field(..., description="IPFS hash of the deployment manifest")

    @field_validator("ipfs_hash")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Deployment IPFS hash must not be empty")
        return value

    def __str__(self) -> str:
        return self.ipfs_hash


class IndexNode(BaseModel):
    """A graph-node index node and the deployments assigned to it."""

    model_config = ConfigDict(frozen=False, validate_assignment=True)

    id: str = Field(..., description="Index node identifier")
    deployments: list[SubgraphDeploymentID] = Field(
        default_factory=list, description="Deployments assigned to this node"
    )

    @property
    def deployment_count(self) -> int:
        """Number of deployments currently assigned."""
        return len(self.deployments)

    @property
    def is_live(self) -> bool:
        """Whether the node can host deployments."""
        return bool(self.id) and self.id != REMOVED_NODE_ID


class SubgraphDeploymentAssignment(BaseModel):
    """Assignment of one deployment to a node, with its status."""

    model_config = ConfigDict(frozen=False, validate_assignment=True)

    id: SubgraphDeploymentID = Field(..., description="Assigned deployment")
    node: str = Field(..., description="Index node the deployment is assigned to")
    status: SubgraphStatus = Field(
        default=SubgraphStatus.ACTIVE, description="Assignment status"
    )

    @property
    def is_virtually_paused(self) -> bool:
        """Whether the assignment uses the legacy node-based pause."""
        return self.node == REMOVED_NODE_ID

    @property
    def listed_status(self) -> SubgraphStatus:
        """Status reported by listings; the removed node counts as paused."""
        if self.is_virtually_paused:
            return SubgraphStatus.PAUSED
        return self.status
