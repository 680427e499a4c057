"""
Record assembly - one row's normalized cells become a complete Lead.

A LeadDraft holds at most one value per canonical field while a row is read;
assemble_lead() is the only place defaults are applied.
"""
import re
from datetime import date, datetime
from typing import Any, Optional, Tuple

from pydantic import BaseModel

from leadtracker.ingestion.contacts import ParsedContact, parse_contacts, to_mobile_numbers
from leadtracker.ingestion.dates import normalize_date
from leadtracker.ingestion.headers import LeadField
from leadtracker.ingestion.status import (
    canonicalize_status,
    canonicalize_unit_type,
    canonicalize_mandate_status,
    canonicalize_document_status,
)
from leadtracker.models.lead import (
    Lead, LeadStatus, UnitType, MandateStatus, DocumentStatus,
)

ADDRESS_SEGMENT = re.compile(r"Address:\s*([^|]+?)\s*(?:\||$)", re.IGNORECASE)
NOTES_SEPARATOR = " | "

DATE_FIELDS = {
    LeadField.CONNECTION_DATE,
    LeadField.FOLLOW_UP_DATE,
    LeadField.LAST_ACTIVITY_DATE,
}


def cell_text(value: Any) -> str:
    """Render a cell as trimmed text. Whole floats lose their ".0"."""
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (datetime, date)):
        return normalize_date(value)
    return str(value).strip()


class LeadDraft(BaseModel):
    """Partial lead for one row; None means no column supplied the field."""
    consumer_number: Optional[str] = None
    kva: Optional[str] = None
    company: Optional[str] = None
    client_name: Optional[str] = None
    company_location: Optional[str] = None
    discom: Optional[str] = None
    gidc: Optional[str] = None
    gst_number: Optional[str] = None

    # Raw contact cells, parsed at assembly once the client name is known
    mobile_number: Optional[str] = None
    mobile_number_2: Optional[str] = None
    mobile_number_3: Optional[str] = None
    contact_name_2: Optional[str] = None
    contact_name_3: Optional[str] = None

    status: Optional[LeadStatus] = None
    unit_type: Optional[UnitType] = None
    mandate_status: Optional[MandateStatus] = None
    document_status: Optional[DocumentStatus] = None

    connection_date: Optional[str] = None
    follow_up_date: Optional[str] = None
    last_activity_date: Optional[str] = None

    notes: Optional[str] = None
    final_conclusion: Optional[str] = None

    def apply(self, field: LeadField, value: Any) -> None:
        """Normalize one cell into its field. Blank cells leave the field untouched."""
        if field in DATE_FIELDS:
            normalized = normalize_date(value)
            if normalized:
                setattr(self, field.value, normalized)
            return

        text = cell_text(value)
        if not text:
            return

        if field == LeadField.STATUS:
            self.status = canonicalize_status(text)
        elif field == LeadField.UNIT_TYPE:
            self.unit_type = canonicalize_unit_type(text)
        elif field == LeadField.MANDATE_STATUS:
            self.mandate_status = canonicalize_mandate_status(text)
        elif field == LeadField.DOCUMENT_STATUS:
            self.document_status = canonicalize_document_status(text)
        elif field == LeadField.NOTES and self.notes:
            self.notes = f"{self.notes}{NOTES_SEPARATOR}{text}"
        else:
            setattr(self, field.value, text)


def extract_address(notes: str) -> Tuple[str, str]:
    """
    Pull an embedded "Address: ..." segment out of notes.
    Returns (address, remaining notes); address is "" when none is present.
    """
    if not notes:
        return "", notes or ""
    match = ADDRESS_SEGMENT.search(notes)
    if not match or not match.group(1).strip():
        return "", notes

    address = match.group(1).strip()
    remaining = notes[:match.start()] + NOTES_SEPARATOR + notes[match.end():]
    remaining = re.sub(r"\s*\|\s*(?:\|\s*)*", NOTES_SEPARATOR, remaining)
    remaining = remaining.strip().strip("|").strip()
    remaining = remaining[:1].upper() + remaining[1:]
    return address, remaining


def assemble_contacts(draft: LeadDraft, client_name: str):
    slots = parse_contacts(draft.mobile_number, fallback_name=client_name)

    overrides = (
        (1, draft.mobile_number_2, draft.contact_name_2),
        (2, draft.mobile_number_3, draft.contact_name_3),
    )
    for index, number_cell, name_cell in overrides:
        number, name = slots[index]
        if number_cell:
            explicit = parse_contacts(number_cell)[0]
            number = explicit.number
            name = explicit.name or name
        if name_cell:
            name = name_cell
        slots[index] = ParsedContact(number, name)

    return to_mobile_numbers(slots)


def assemble_lead(draft: LeadDraft) -> Lead:
    """Finalize a draft into a Lead with every unset field defaulted."""
    client_name = draft.client_name or ""
    company_location = draft.company_location or ""
    notes = draft.notes or ""

    if not company_location:
        address, cleaned = extract_address(notes)
        if address:
            company_location, notes = address, cleaned

    lead = Lead(
        kva=draft.kva or "",
        consumer_number=draft.consumer_number or "",
        company=draft.company or "",
        client_name=client_name,
        discom=draft.discom or "",
        gidc=draft.gidc or "",
        gst_number=draft.gst_number or "",
        company_location=company_location,
        unit_type=draft.unit_type or UnitType.NEW,
        mobile_numbers=assemble_contacts(draft, client_name),
        status=draft.status or LeadStatus.NEW,
        mandate_status=draft.mandate_status or MandateStatus.PENDING,
        document_status=draft.document_status or DocumentStatus.PENDING_DOCUMENTS,
        connection_date=draft.connection_date or "",
        follow_up_date=draft.follow_up_date or "",
        last_activity_date=draft.last_activity_date or "",
        notes=notes,
        final_conclusion=draft.final_conclusion or "",
        is_done=False,
        is_deleted=False,
        is_updated=False,
    )
    lead.sync_main_number()
    return lead
