"""
API dependencies - shared across all routes.
"""
from functools import lru_cache

from fastapi import Depends

from leadtracker.database import engine
from leadtracker.repositories.lead_repo import LeadRepository
from leadtracker.repositories.store import KeyValueStore, SQLModelStore
from leadtracker.repositories.view_repo import SavedViewRepository
from leadtracker.services.lead_service import LeadService
from leadtracker.services.view_service import SavedViewService


@lru_cache
def get_store() -> KeyValueStore:
    """The process-wide key-value store."""
    return SQLModelStore(engine)


def get_lead_service(store: KeyValueStore = Depends(get_store)) -> LeadService:
    return LeadService(LeadRepository(store))


def get_view_service(store: KeyValueStore = Depends(get_store)) -> SavedViewService:
    return SavedViewService(SavedViewRepository(store))
