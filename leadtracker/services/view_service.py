"""
Saved view service.
"""
import logging
from typing import List

from leadtracker.core.exceptions import NotFoundError, ValidationError
from leadtracker.models.view import SavedView
from leadtracker.repositories.view_repo import SavedViewRepository
from leadtracker.schemas.common import SavedViewCreate

logger = logging.getLogger(__name__)


class SavedViewService:
    """Service for saved view operations."""

    def __init__(self, view_repo: SavedViewRepository):
        self.view_repo = view_repo

    def list(self) -> List[SavedView]:
        return self.view_repo.list()

    def add(self, view_data: SavedViewCreate) -> SavedView:
        """Save the current filters under a name."""
        name = view_data.name.strip()
        if not name:
            raise ValidationError("View name is required", field="name")

        view = SavedView(name=name, filters=view_data.filters)
        self.view_repo.append(view)
        logger.info(f"Saved view '{name}' created")
        return view

    def delete(self, view_id: str) -> None:
        if not self.view_repo.remove(view_id):
            raise NotFoundError("Saved view", view_id)
