"""
Common schemas used across multiple endpoints.
"""
from typing import Optional

from pydantic import BaseModel

from leadtracker.models.lead import CamelModel
from leadtracker.schemas.lead import LeadFilters


class MessageResponse(BaseModel):
    """Simple message response."""
    message: str
    count: Optional[int] = None

    class Config:
        json_schema_extra = {"example": {"message": "Operation successful", "count": 3}}


class HealthResponse(BaseModel):
    """Health check response."""
    status: str = "healthy"
    version: str = "1.0.0"


class SavedViewCreate(CamelModel):
    """Create a saved view."""
    name: str
    filters: LeadFilters = LeadFilters()
