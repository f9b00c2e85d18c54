"""Migration run models."""

from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from indexer_agent.graph_node.models import SubgraphDeploymentID


def utc_now() -> datetime:
    """Return current UTC time."""
    return datetime.now(UTC)


class MigrationDirection(str, Enum):
    """Direction of a migration run."""

    UP = "up"
    DOWN = "down"


class MigrationResult(BaseModel):
    """Outcome of a completed migration run."""

    model_config = ConfigDict(frozen=False, validate_assignment=True)

    direction: MigrationDirection = Field(..., description="Direction that was run")
    target_node: str | None = Field(
        default=None, description="Node paused deployments were moved to (up only)"
    )
    migrated: list[SubgraphDeploymentID] = Field(
        default_factory=list, description="Deployments processed, in order"
    )
    started_at: datetime = Field(default_factory=utc_now, description="Run start")
    completed_at: datetime | None = Field(default=None, description="Run end")

    @property
    def migrated_count(self) -> int:
        """Number of deployments processed."""
        return len(self.migrated)
