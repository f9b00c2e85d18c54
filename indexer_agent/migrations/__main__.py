"""Run the deployment pause migration against a graph-node.

Usage:
    # Migrate virtually paused deployments to the least loaded node
    indexer-migrate up

    # Send them to a maintenance node instead
    INDEXER_PAUSED_TARGET_NODE=maintenance_0 indexer-migrate up
    indexer-migrate up --target-node maintenance_0

    # Roll back to the virtual pause convention
    indexer-migrate down
"""

import argparse
import asyncio
from collections.abc import Sequence

from indexer_agent.config import get_settings
from indexer_agent.config.models.migration import PauseMigrationConfig
from indexer_agent.config.settings import IndexerSettings
from indexer_agent.graph_node.client import GraphNodeClient
from indexer_agent.graph_node.exceptions import GraphNodeError
from indexer_agent.graph_node.store import AssignmentStore, NodeDirectory
from indexer_agent.migrations.exceptions import MigrationError
from indexer_agent.migrations.models import MigrationDirection, MigrationResult
from indexer_agent.migrations.pause_mechanism import PauseMechanismMigration
from indexer_agent.observability.logging import get_logger, setup_logging

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the command line parser."""
    parser = argparse.ArgumentParser(
        prog="indexer-migrate",
        description="Migrate paused deployments between the virtual and explicit pause mechanisms.",
    )
    parser.add_argument(
        "direction",
        choices=[d.value for d in MigrationDirection],
        help="up: pause in place and move to a real node, down: move back to 'removed'",
    )
    parser.add_argument(
        "--target-node",
        default=None,
        help=(
            "Node receiving paused deployments (overrides INDEXER_PAUSED_TARGET_NODE). "
            "Used as given; naming 'removed' leaves deployments virtually paused"
        ),
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Override the configured log level",
    )
    return parser


async def run_migration(
    direction: MigrationDirection,
    node_directory: NodeDirectory,
    assignment_store: AssignmentStore,
    config: PauseMigrationConfig,
) -> MigrationResult:
    """Run one direction of the pause migration."""
    migration = PauseMechanismMigration(node_directory, assignment_store, config)
    if direction == MigrationDirection.UP:
        return await migration.up()
    return await migration.down()


async def _run_against_graph_node(
    direction: MigrationDirection,
    settings: IndexerSettings,
    config: PauseMigrationConfig,
) -> MigrationResult:
    async with GraphNodeClient.from_config(settings.graph_node) as graph_node:
        return await run_migration(direction, graph_node, graph_node, config)


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for the indexer-migrate command.

    Returns:
        Process exit code
    """
    args = build_parser().parse_args(argv)
    settings = get_settings()

    setup_logging(
        level=args.log_level or settings.log_level,
        format=settings.observability.log_format,
        redact_secrets=settings.observability.redact_secrets,
    )

    config = PauseMigrationConfig.from_settings(settings)
    if args.target_node:
        config = config.model_copy(update={"paused_target_node": args.target_node})

    try:
        asyncio.run(_run_against_graph_node(MigrationDirection(args.direction), settings, config))
    except (MigrationError, GraphNodeError) as e:
        logger.error("pause_migration_aborted", direction=args.direction, error=e.message)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
