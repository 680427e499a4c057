"""
Saved view repository.
"""
from typing import Optional

from leadtracker.config import settings
from leadtracker.models.view import SavedView
from leadtracker.repositories.base import CollectionRepository
from leadtracker.repositories.store import KeyValueStore


class SavedViewRepository(CollectionRepository[SavedView]):
    """Repository for SavedView operations."""

    def __init__(self, store: KeyValueStore, key: Optional[str] = None):
        super().__init__(SavedView, store, key or settings.SAVED_VIEWS_STORE_KEY)
