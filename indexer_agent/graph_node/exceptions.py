"""Graph-node collaborator exceptions.

All failures talking to a graph-node (transport, authentication, rejected
calls) surface as GraphNodeError so callers can treat the collaborator as
unavailable without knowing which backend is in use.
"""

from typing import Any


class GraphNodeError(Exception):
    """Base exception for graph-node errors."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        details: Any = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = details


class AssignmentNotFoundError(GraphNodeError):
    """Raised when a deployment has no assignment record."""

    def __init__(self, deployment: Any) -> None:
        super().__init__(f"No assignment found for deployment {deployment}")
        self.deployment = deployment
