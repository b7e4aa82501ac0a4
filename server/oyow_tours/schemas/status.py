"""Status-related Pydantic schemas."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class DatabaseState(str, Enum):
    """Document store connection state."""
    CONNECTED = "Connected"
    DISCONNECTED = "Disconnected"


class HealthStatus(str, Enum):
    """Health status enumeration."""
    HEALTHY = "healthy"
    UNHEALTHY = "unhealthy"


class StatusResponse(BaseModel):
    """Status check response schema."""

    database: DatabaseState = Field(..., description="Document store connection state")
    status: HealthStatus = Field(..., description="Service status")
    timestamp: datetime = Field(..., description="Current server time (ISO 8601)")
