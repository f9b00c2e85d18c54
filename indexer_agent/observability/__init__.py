"""Observability: structured logging with structlog."""

from indexer_agent.observability.logging import SecretRedactor, get_logger, setup_logging

__all__ = ["SecretRedactor", "get_logger", "setup_logging"]
