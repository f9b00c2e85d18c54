"""Placement migrations for the index node fleet.

The pause mechanism migration moves paused deployments from the legacy
virtual pause (assignment to the "removed" node) to graph-node's explicit
pause, and back.
"""

from indexer_agent.migrations.exceptions import MigrationError, MigrationRecordError
from indexer_agent.migrations.models import MigrationDirection, MigrationResult
from indexer_agent.migrations.pause_mechanism import PauseMechanismMigration, down, up
from indexer_agent.migrations.selection import select_target_node

__all__ = [
    # Enums
    "MigrationDirection",
    # Models
    "MigrationResult",
    # Migration
    "PauseMechanismMigration",
    "select_target_node",
    "up",
    "down",
    # Errors
    "MigrationError",
    "MigrationRecordError",
]
