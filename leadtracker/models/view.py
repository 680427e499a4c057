"""
Saved view model - a named, reusable filter specification.
"""
from pydantic import Field

from leadtracker.models.lead import CamelModel, new_id
from leadtracker.schemas.lead import LeadFilters


class SavedView(CamelModel):
    id: str = Field(default_factory=new_id)
    name: str
    filters: LeadFilters = Field(default_factory=LeadFilters)
