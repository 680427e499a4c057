"""
Leads API routes.
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Query, Response, UploadFile

from leadtracker.api.deps import get_lead_service
from leadtracker.config import settings
from leadtracker.core.exceptions import (
    ForbiddenError, ImportStructureError, NotFoundError,
    raise_forbidden, raise_not_found, raise_validation_error,
)
from leadtracker.models.lead import Activity, Lead, LeadStatus
from leadtracker.schemas.common import MessageResponse
from leadtracker.schemas.lead import (
    ActivityCreate, LeadCreate, LeadFilters, LeadIdsRequest, LeadImportResponse,
    LeadStats, LeadUpdate, PurgeRequest,
)
from leadtracker.services.lead_service import LeadService

router = APIRouter(prefix=f"{settings.API_PREFIX}/leads", tags=["leads"])

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def lead_filters(
    status: Optional[List[LeadStatus]] = Query(None),
    follow_up_date_start: Optional[str] = Query(None, alias="followUpDateStart"),
    follow_up_date_end: Optional[str] = Query(None, alias="followUpDateEnd"),
    search: Optional[str] = None,
    discom: Optional[str] = None,
) -> LeadFilters:
    return LeadFilters(
        status=status,
        follow_up_date_start=follow_up_date_start,
        follow_up_date_end=follow_up_date_end,
        search_term=search,
        discom=discom,
    )


@router.get("", response_model=List[Lead])
async def list_leads(
    filters: LeadFilters = Depends(lead_filters),
    lead_service: LeadService = Depends(get_lead_service),
):
    """Main feed: fresh, active leads unless a status filter is given."""
    return lead_service.feed(filters)


@router.post("", response_model=Lead, status_code=201)
async def create_lead(
    lead_data: LeadCreate,
    lead_service: LeadService = Depends(get_lead_service),
):
    """Create a new lead."""
    return lead_service.create_lead(lead_data)


@router.get("/all", response_model=List[Lead])
async def list_all_leads(
    search: Optional[str] = None,
    lead_service: LeadService = Depends(get_lead_service),
):
    """Every lead including deleted and done ones, deleted first."""
    return lead_service.archive(search)


@router.get("/upcoming", response_model=List[Lead])
async def list_upcoming(
    discom: Optional[str] = None,
    lead_service: LeadService = Depends(get_lead_service),
):
    return lead_service.upcoming(discom=discom)


@router.get("/mandates", response_model=List[Lead])
async def list_mandates(
    search: Optional[str] = None,
    lead_service: LeadService = Depends(get_lead_service),
):
    return lead_service.mandates(search)


@router.get("/stats", response_model=LeadStats)
async def get_lead_stats(
    filters: LeadFilters = Depends(lead_filters),
    lead_service: LeadService = Depends(get_lead_service),
):
    """Get lead statistics."""
    return lead_service.get_stats(filters)


@router.post("/import", response_model=LeadImportResponse)
async def import_leads(
    file: UploadFile = File(...),
    lead_service: LeadService = Depends(get_lead_service),
):
    """Import leads from a CSV or Excel file."""
    content = await file.read()
    try:
        return lead_service.import_file(content, file.filename or "")
    except ImportStructureError as e:
        raise_validation_error(e.message)


@router.get("/export")
async def export_leads(
    format: str = Query("csv", pattern="^(csv|xlsx)$"),
    lead_service: LeadService = Depends(get_lead_service),
):
    """Export every lead in the importable column layout."""
    if format == "xlsx":
        return Response(
            content=lead_service.export_xlsx(),
            media_type=XLSX_MEDIA_TYPE,
            headers={"Content-Disposition": "attachment; filename=leads_export.xlsx"}
        )
    return Response(
        content=lead_service.export_csv(),
        media_type="text/csv",
        headers={"Content-Disposition": "attachment; filename=leads_export.csv"}
    )


@router.post("/restore", response_model=MessageResponse)
async def restore_leads(
    request: LeadIdsRequest,
    lead_service: LeadService = Depends(get_lead_service),
):
    """Undo soft delete on the given leads."""
    count = lead_service.restore_leads(request.lead_ids)
    return MessageResponse(message="Leads restored", count=count)


@router.post("/purge", response_model=MessageResponse)
async def purge_leads(
    request: PurgeRequest,
    lead_service: LeadService = Depends(get_lead_service),
):
    """Permanently remove leads."""
    try:
        count = lead_service.purge_leads(request.lead_ids, request.password)
    except ForbiddenError as e:
        raise_forbidden(e.message)
    return MessageResponse(message="Leads permanently deleted", count=count)


@router.post("/reset-updated", response_model=MessageResponse)
async def reset_updated(lead_service: LeadService = Depends(get_lead_service)):
    """Return every edited lead to the main feed."""
    count = lead_service.reset_updated_leads()
    return MessageResponse(message="Updated leads reset", count=count)


@router.get("/{lead_id}", response_model=Lead)
async def get_lead(
    lead_id: str,
    lead_service: LeadService = Depends(get_lead_service),
):
    """Get a lead by ID."""
    try:
        return lead_service.get_lead(lead_id)
    except NotFoundError:
        raise_not_found("Lead", lead_id)


@router.patch("/{lead_id}", response_model=Lead)
async def update_lead(
    lead_id: str,
    lead_data: LeadUpdate,
    lead_service: LeadService = Depends(get_lead_service),
):
    """Update a lead."""
    try:
        return lead_service.update_lead(lead_id, lead_data)
    except NotFoundError:
        raise_not_found("Lead", lead_id)


@router.delete("/{lead_id}", status_code=204)
async def delete_lead(
    lead_id: str,
    lead_service: LeadService = Depends(get_lead_service),
):
    """Soft delete a lead."""
    try:
        lead_service.delete_lead(lead_id)
    except NotFoundError:
        raise_not_found("Lead", lead_id)


@router.post("/{lead_id}/done", response_model=Lead)
async def mark_lead_done(
    lead_id: str,
    lead_service: LeadService = Depends(get_lead_service),
):
    try:
        return lead_service.mark_done(lead_id)
    except NotFoundError:
        raise_not_found("Lead", lead_id)


@router.post("/{lead_id}/activities", response_model=Activity, status_code=201)
async def add_activity(
    lead_id: str,
    activity_data: ActivityCreate,
    lead_service: LeadService = Depends(get_lead_service),
):
    """Append an entry to the lead's activity trail."""
    try:
        return lead_service.add_activity(lead_id, activity_data.description)
    except NotFoundError:
        raise_not_found("Lead", lead_id)
