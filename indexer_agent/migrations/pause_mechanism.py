"""Migration from virtual deployment pauses to graph-node's pause mechanism.

Historically a deployment was paused by reassigning it to the "removed"
node. graph-node now supports pausing a deployment in place, so the
forward migration pauses every virtually paused deployment and moves it to
a real index node. The reverse migration moves every paused deployment back
to "removed", leaving it paused.

Each deployment is committed on its own. A run that fails part way leaves
the deployments before the failure migrated, and running the same
direction again picks up where it stopped.
"""

from datetime import UTC, datetime

import structlog

from indexer_agent.config.models.migration import PauseMigrationConfig
from indexer_agent.graph_node.enums import SubgraphStatus
from indexer_agent.graph_node.models import REMOVED_NODE_ID, SubgraphDeploymentAssignment
from indexer_agent.graph_node.store import AssignmentStore, NodeDirectory
from indexer_agent.migrations.exceptions import MigrationRecordError
from indexer_agent.migrations.models import MigrationDirection, MigrationResult
from indexer_agent.migrations.selection import select_target_node
from indexer_agent.observability.logging import get_logger

logger = get_logger(__name__)


class PauseMechanismMigration:
    """Moves paused deployments between the virtual and explicit pause conventions."""

    NAME = "use-new-deployment-pause-mechanism"

    def __init__(
        self,
        node_directory: NodeDirectory,
        assignment_store: AssignmentStore,
        config: PauseMigrationConfig | None = None,
    ) -> None:
        """Initialize migration.

        Args:
            node_directory: Source of the live index node fleet
            assignment_store: Store holding deployment assignments
            config: Migration options (target node override)
        """
        self._node_directory = node_directory
        self._assignment_store = assignment_store
        self._config = config or PauseMigrationConfig()

    async def up(self) -> MigrationResult:
        """Pause virtually paused deployments and move them to a real node.

        Returns:
            MigrationResult listing the migrated deployments

        Raises:
            GraphNodeError: If the fleet or the assignments cannot be listed
            MigrationRecordError: If a deployment fails to pause or reassign
        """
        with structlog.contextvars.bound_contextvars(
            migration=self.NAME, direction=MigrationDirection.UP.value
        ):
            logger.info("pause_migration_started")

            index_nodes = await self._node_directory.list_nodes()
            logger.info(
                "index_nodes_listed",
                index_nodes=[
                    {"id": node.id, "deployments": node.deployment_count}
                    for node in index_nodes
                ],
            )

            target_node = select_target_node(index_nodes, self._config.paused_target_node)

            paused = await self._assignment_store.list_by_status(SubgraphStatus.PAUSED)
            virtually_paused = [a for a in paused if a.is_virtually_paused]

            logger.info(
                "pausing_and_reassigning_deployments",
                paused_deployments=[str(a.id) for a in virtually_paused],
                target_node=target_node,
            )

            result = MigrationResult(direction=MigrationDirection.UP, target_node=target_node)
            for assignment in virtually_paused:
                await self._pause_and_reassign(assignment, target_node)
                result.migrated.append(assignment.id)

            return self._complete(result)

    async def down(self) -> MigrationResult:
        """Move every paused deployment back to the "removed" node.

        Deployments stay paused. Paused deployments that never used the
        virtual convention are moved as well.

        Returns:
            MigrationResult listing the reverted deployments

        Raises:
            GraphNodeError: If the assignments cannot be listed
            MigrationRecordError: If a deployment fails to reassign
        """
        with structlog.contextvars.bound_contextvars(
            migration=self.NAME, direction=MigrationDirection.DOWN.value
        ):
            logger.info("pause_migration_started")

            paused = await self._assignment_store.list_by_status(SubgraphStatus.PAUSED)

            logger.info(
                "reassigning_paused_deployments",
                paused_deployments=[str(a.id) for a in paused],
                target_node=REMOVED_NODE_ID,
            )

            result = MigrationResult(direction=MigrationDirection.DOWN)
            for assignment in paused:
                try:
                    await self._assignment_store.reassign(assignment.id, REMOVED_NODE_ID)
                except Exception as e:
                    raise self._record_failed(
                        assignment, MigrationDirection.DOWN, "reassign", e
                    ) from e

                logger.debug(
                    "deployment_reassigned",
                    deployment=str(assignment.id),
                    node_id=REMOVED_NODE_ID,
                )
                result.migrated.append(assignment.id)

            return self._complete(result)

    async def _pause_and_reassign(
        self, assignment: SubgraphDeploymentAssignment, target_node: str
    ) -> None:
        # Pause first so the deployment never looks active on a real node
        step = "pause"
        try:
            await self._assignment_store.pause(assignment.id)
            step = "reassign"
            await self._assignment_store.reassign(assignment.id, target_node)
        except Exception as e:
            raise self._record_failed(assignment, MigrationDirection.UP, step, e) from e

        logger.debug(
            "deployment_paused_and_reassigned",
            deployment=str(assignment.id),
            node_id=target_node,
        )

    def _record_failed(
        self,
        assignment: SubgraphDeploymentAssignment,
        direction: MigrationDirection,
        step: str,
        error: Exception,
    ) -> MigrationRecordError:
        logger.error(
            "deployment_migration_failed",
            deployment=str(assignment.id),
            node_id=assignment.node,
            step=step,
            error=str(error),
        )
        return MigrationRecordError(assignment.id, direction, step)

    def _complete(self, result: MigrationResult) -> MigrationResult:
        result.completed_at = datetime.now(UTC)
        logger.info(
            "pause_migration_completed",
            target_node=result.target_node,
            migrated_count=result.migrated_count,
            migrated=[str(deployment) for deployment in result.migrated],
        )
        return result


async def up(
    node_directory: NodeDirectory,
    assignment_store: AssignmentStore,
    config: PauseMigrationConfig | None = None,
) -> MigrationResult:
    """Run the forward migration."""
    return await PauseMechanismMigration(node_directory, assignment_store, config).up()


async def down(
    node_directory: NodeDirectory,
    assignment_store: AssignmentStore,
    config: PauseMigrationConfig | None = None,
) -> MigrationResult:
    """Run the reverse migration."""
    return await PauseMechanismMigration(node_directory, assignment_store, config).down()
