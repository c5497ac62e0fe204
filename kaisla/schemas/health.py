"""Health check response."""

from typing import Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Liveness of the API plus reachability of PostgreSQL."""

    status: Literal["ok"] = "ok"
    service: str = Field(default="atelier-kaisla-api", description="Service name")
    environment: Literal["dev", "prod"] = Field(description="APP_ENV of the running process")
    database: Literal["connected", "disconnected"] = Field(
        description="Result of a SELECT 1 against the configured database",
    )
