"""Configuration model exports.

    from indexer_agent.config.models import GraphNodeConfig, PauseMigrationConfig
"""

from indexer_agent.config.models.graph_node import GraphNodeConfig
from indexer_agent.config.models.migration import PauseMigrationConfig
from indexer_agent.config.models.observability import LogFormat, ObservabilityConfig

__all__ = [
    "GraphNodeConfig",
    "LogFormat",
    "ObservabilityConfig",
    "PauseMigrationConfig",
]
