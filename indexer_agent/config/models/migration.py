"""Migration configuration models.

Defines the options recognized by the deployment pause migration.
"""

from typing import TYPE_CHECKING

from pydantic import BaseModel, Field, field_validator

if TYPE_CHECKING:
    from indexer_agent.config.settings import IndexerSettings


class PauseMigrationConfig(BaseModel):
    """Options for migrating to the explicit deployment pause mechanism."""

    paused_target_node: str | None = Field(
        default=None,
        description="Node receiving paused deployments, bypasses load-based selection",
    )

    @field_validator("paused_target_node")
    @classmethod
    def _blank_is_unset(cls, value: str | None) -> str | None:
        if value is not None and not value.strip():
            return None
        return value

    @classmethod
    def from_settings(cls, settings: "IndexerSettings") -> "PauseMigrationConfig":
        """Build migration options from the root settings."""
        return cls(paused_target_node=settings.paused_target_node)
