"""
Lead schemas.
"""
from typing import Optional, List

from pydantic import ConfigDict, Field

from leadtracker.models.lead import (
    CamelModel, MobileNumber, LeadStatus, UnitType, MandateStatus, DocumentStatus,
)


class LeadCreate(CamelModel):
    """Create a lead by manual entry."""
    kva: str
    consumer_number: str
    company: str = ""
    client_name: str = ""
    discom: str = ""
    gidc: str = ""
    gst_number: str = ""
    company_location: str = ""
    unit_type: UnitType = UnitType.NEW
    mobile_numbers: List[MobileNumber] = Field(default_factory=list, max_length=3)
    mobile_number: str = ""
    status: LeadStatus = LeadStatus.NEW
    mandate_status: MandateStatus = MandateStatus.PENDING
    document_status: DocumentStatus = DocumentStatus.PENDING_DOCUMENTS
    connection_date: str = ""
    follow_up_date: str = ""
    notes: str = ""
    final_conclusion: str = ""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "kva": "150",
                "consumerNumber": "31245007891",
                "company": "Shree Polymers",
                "clientName": "Raj Patel",
                "discom": "DGVCL",
                "mobileNumbers": [{"number": "9876543210", "name": "Raj Patel", "isMain": True}],
                "followUpDate": "15-01-2024",
                "notes": "Interested in solar | Address: Plot 12, GIDC Vapi"
            }
        }
    )


class LeadUpdate(CamelModel):
    """Update an existing lead."""
    kva: Optional[str] = None
    consumer_number: Optional[str] = None
    company: Optional[str] = None
    client_name: Optional[str] = None
    discom: Optional[str] = None
    gidc: Optional[str] = None
    gst_number: Optional[str] = None
    company_location: Optional[str] = None
    unit_type: Optional[UnitType] = None
    mobile_numbers: Optional[List[MobileNumber]] = Field(default=None, max_length=3)
    mobile_number: Optional[str] = None
    status: Optional[LeadStatus] = None
    mandate_status: Optional[MandateStatus] = None
    document_status: Optional[DocumentStatus] = None
    connection_date: Optional[str] = None
    follow_up_date: Optional[str] = None
    notes: Optional[str] = None
    final_conclusion: Optional[str] = None


class LeadFilters(CamelModel):
    """Query specification for one view. Not persisted except inside saved views."""
    status: Optional[List[LeadStatus]] = None
    follow_up_date_start: Optional[str] = None
    follow_up_date_end: Optional[str] = None
    search_term: Optional[str] = None  # Digits search phones, text searches names, notes, ids
    discom: Optional[str] = None


class LeadImportResponse(CamelModel):
    """Import result."""
    total_rows: int
    imported: int
    skipped: int


class LeadSummary(CamelModel):
    """Follow-up counters for the dashboard."""
    total_leads: int
    due_today: int
    upcoming: int
    overdue: int
    follow_up_mandate: int


class LeadStats(CamelModel):
    summary: LeadSummary
    by_status: dict


class ActivityCreate(CamelModel):
    description: str = Field(min_length=1)


class LeadIdsRequest(CamelModel):
    """Bulk action on leads."""
    lead_ids: List[str]


class PurgeRequest(LeadIdsRequest):
    """Permanent removal; requires the purge password."""
    password: str
