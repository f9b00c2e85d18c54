"""Target node selection for relocated deployments."""

from collections.abc import Sequence

from indexer_agent.graph_node.models import DEFAULT_TARGET_NODE, REMOVED_NODE_ID, IndexNode
from indexer_agent.observability.logging import get_logger

logger = get_logger(__name__)


def select_target_node(
    nodes: Sequence[IndexNode],
    override: str | None = None,
) -> str:
    """Pick the node that receives relocated deployments.

    An operator override is returned verbatim, even when it names a node
    outside the live set. An override of REMOVED_NODE_ID leaves deployments
    virtually paused and is logged as an error. Otherwise the node with the
    fewest deployments wins, ties going to the node listed first. An empty
    fleet yields DEFAULT_TARGET_NODE.

    Args:
        nodes: Live index nodes, in the order the directory reported them
        override: Operator-supplied target node

    Returns:
        Target node identifier
    """
    if override:
        if override == REMOVED_NODE_ID:
            logger.error(
                "target_node_override_is_removed",
                target_node=override,
                live_nodes=[node.id for node in nodes],
            )
        elif override not in {node.id for node in nodes}:
            logger.warning(
                "target_node_override_not_live",
                target_node=override,
                live_nodes=[node.id for node in nodes],
            )
        return override

    # sorted() is stable, so equal counts keep directory order
    ranked = sorted(nodes, key=lambda node: node.deployment_count)
    if not ranked:
        logger.warning("no_live_index_nodes", target_node=DEFAULT_TARGET_NODE)
        return DEFAULT_TARGET_NODE
    return ranked[0].id
