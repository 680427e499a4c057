"""
Lead repository with bulk lifecycle operations.
"""
from typing import Iterable, Optional

from leadtracker.config import settings
from leadtracker.models.lead import Lead
from leadtracker.repositories.base import CollectionRepository
from leadtracker.repositories.store import KeyValueStore


class LeadRepository(CollectionRepository[Lead]):
    """Repository for Lead operations."""

    def __init__(self, store: KeyValueStore, key: Optional[str] = None):
        super().__init__(Lead, store, key or settings.LEADS_STORE_KEY)

    def restore(self, lead_ids: Iterable[str]) -> int:
        """Clear the soft-delete flag on the given leads."""
        wanted = set(lead_ids)
        restored = 0
        for lead in self._items:
            if lead.id in wanted and lead.is_deleted:
                lead.is_deleted = False
                restored += 1
        if restored:
            self._save()
        return restored

    def reset_updated(self) -> int:
        """Return every updated lead to the main feed."""
        reset = 0
        for lead in self._items:
            if lead.is_updated:
                lead.is_updated = False
                reset += 1
        if reset:
            self._save()
        return reset
