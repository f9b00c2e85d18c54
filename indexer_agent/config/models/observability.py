"""Observability configuration models."""

from typing import Literal

from pydantic import BaseModel, Field

LogFormat = Literal["json", "console"]


class ObservabilityConfig(BaseModel):
    """Logging output configuration."""

    log_format: LogFormat = Field(default="json", description="Output format")
    redact_secrets: bool = Field(
        default=True, description="Redact credentials from log events"
    )
