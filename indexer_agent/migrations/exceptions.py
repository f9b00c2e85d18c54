"""Migration exceptions."""

from indexer_agent.graph_node.models import SubgraphDeploymentID
from indexer_agent.migrations.models import MigrationDirection


class MigrationError(Exception):
    """Base exception for migration errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class MigrationRecordError(MigrationError):
    """Raised when a deployment could not be migrated.

    Deployments processed before this one stay migrated; re-running the
    migration resumes from here.
    """

    def __init__(
        self,
        deployment: SubgraphDeploymentID,
        direction: MigrationDirection,
        step: str,
    ) -> None:
        super().__init__(
            f"Migration {direction.value} halted: failed to {step} deployment {deployment}"
        )
        self.deployment = deployment
        self.direction = direction
        self.step = step
