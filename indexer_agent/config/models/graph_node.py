"""Graph-node connection configuration."""

from pydantic import BaseModel, Field


class GraphNodeConfig(BaseModel):
    """Endpoints and timeouts for talking to a graph-node."""

    status_endpoint: str = Field(
        default="http://localhost:8030/graphql",
        description="Indexing status GraphQL endpoint",
    )
    admin_endpoint: str = Field(
        default="http://localhost:8020",
        description="Admin JSON-RPC endpoint",
    )
    timeout_seconds: float = Field(
        default=30.0, gt=0.0, description="Per-request timeout"
    )
