"""
Schema for the health check endpoint.
"""
from datetime import datetime
from pydantic import BaseModel


class HealthResponse(BaseModel):
    """Schema for health check endpoint response."""
    status: str
    database: str
    timestamp: datetime
