"""
Saved views API routes.
"""
from typing import List

from fastapi import APIRouter, Depends

from leadtracker.api.deps import get_view_service
from leadtracker.config import settings
from leadtracker.core.exceptions import (
    NotFoundError, ValidationError, raise_not_found, raise_validation_error,
)
from leadtracker.models.view import SavedView
from leadtracker.schemas.common import SavedViewCreate
from leadtracker.services.view_service import SavedViewService

router = APIRouter(prefix=f"{settings.API_PREFIX}/views", tags=["views"])


@router.get("", response_model=List[SavedView])
async def list_views(view_service: SavedViewService = Depends(get_view_service)):
    return view_service.list()


@router.post("", response_model=SavedView, status_code=201)
async def create_view(
    view_data: SavedViewCreate,
    view_service: SavedViewService = Depends(get_view_service),
):
    """Save a filter combination under a name."""
    try:
        return view_service.add(view_data)
    except ValidationError as e:
        raise_validation_error(e.message)


@router.delete("/{view_id}", status_code=204)
async def delete_view(
    view_id: str,
    view_service: SavedViewService = Depends(get_view_service),
):
    try:
        view_service.delete(view_id)
    except NotFoundError:
        raise_not_found("Saved view", view_id)
