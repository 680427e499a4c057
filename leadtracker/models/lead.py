"""
Lead model - the canonical record produced by ingestion and read by every view.
Serialized with camelCase keys so the stored collection keeps its historical shape.
"""
import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class LeadStatus(str, Enum):
    """Workflow status of a lead."""
    NEW = "New"
    CNR = "CNR"  # Call not received
    BUSY = "Busy"
    FOLLOW_UP = "Follow-up"
    DEAL_CLOSE = "Deal Close"
    WORK_ALLOTED = "Work Alloted"
    HOTLEAD = "Hotlead"
    MANDATE_SENT = "Mandate Sent"
    DOCUMENTATION = "Documentation"


class UnitType(str, Enum):
    NEW = "New"
    EXISTING = "Existing"
    OTHER = "Other"


class MandateStatus(str, Enum):
    PENDING = "Pending"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"


class DocumentStatus(str, Enum):
    PENDING_DOCUMENTS = "Pending Documents"
    DOCUMENTS_SUBMITTED = "Documents Submitted"
    DOCUMENTS_REVIEWED = "Documents Reviewed"
    SIGNED_MANDATE = "Signed Mandate"


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


def new_id() -> str:
    return str(uuid.uuid4())


class MobileNumber(CamelModel):
    """One phone contact of a lead. Numbers are digits only, at most 10 long."""
    id: str = Field(default_factory=new_id)
    number: str = ""
    name: str = ""
    is_main: bool = False

    @property
    def is_empty(self) -> bool:
        return not self.number and not self.name


class Activity(CamelModel):
    """Audit trail entry. Append-only on the owning lead."""
    id: str = Field(default_factory=new_id)
    lead_id: str
    description: str
    timestamp: str = Field(default_factory=lambda: datetime.now(timezone.utc).isoformat())


class Lead(CamelModel):
    """
    Lead entity - one utility connection being worked by the sales team.
    kva and consumer_number are the identity fields required at import.
    """
    id: str = Field(default_factory=new_id)

    # Identity
    kva: str = ""
    consumer_number: str = ""
    company: str = ""
    client_name: str = ""

    # Descriptive
    discom: str = ""
    gidc: str = ""
    gst_number: str = ""
    company_location: str = ""
    unit_type: UnitType = UnitType.NEW

    # Contacts; mobile_number mirrors the main contact for older readers
    mobile_numbers: List[MobileNumber] = Field(default_factory=list)
    mobile_number: str = ""

    # Workflow
    status: LeadStatus = LeadStatus.NEW
    mandate_status: MandateStatus = MandateStatus.PENDING
    document_status: DocumentStatus = DocumentStatus.PENDING_DOCUMENTS

    # Dates, DD-MM-YYYY or ""
    connection_date: str = ""
    follow_up_date: str = ""
    last_activity_date: str = ""

    # Lifecycle flags
    is_done: bool = False
    is_deleted: bool = False
    is_updated: bool = False

    activities: List[Activity] = Field(default_factory=list)

    notes: str = ""
    final_conclusion: str = ""

    def main_contact(self) -> Optional[MobileNumber]:
        """The flagged main contact, else the first entry by convention."""
        for contact in self.mobile_numbers:
            if contact.is_main:
                return contact
        return self.mobile_numbers[0] if self.mobile_numbers else None

    def sync_main_number(self) -> None:
        """Enforce a single main flag and refresh the scalar mirror."""
        main = self.main_contact()
        for contact in self.mobile_numbers:
            contact.is_main = contact is main
        self.mobile_number = main.number if main is not None else ""

    def phone_numbers(self) -> List[str]:
        numbers = [self.mobile_number] + [m.number for m in self.mobile_numbers]
        return [n for n in numbers if n]
