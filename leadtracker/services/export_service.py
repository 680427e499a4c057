"""
Export service - the fixed 17-column sheet that the importer reads back.
"""
import csv
import io
from typing import Iterable, List, Optional

from openpyxl import Workbook
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter

from leadtracker.ingestion.assembler import extract_address
from leadtracker.ingestion.contacts import format_contact
from leadtracker.models.lead import Lead, MobileNumber

EXPORT_HEADERS = [
    "con.no",
    "KVA",
    "Connection Date",
    "Company Name",
    "Client Name",
    "Discom",
    "GIDC",
    "GST Number",
    "Main Mobile Number",
    "Lead Status",
    "Last Discussion",
    "Address",
    "Next Follow-up Date",
    "Mobile Number 2",
    "Contact Name 2",
    "Mobile Number 3",
    "Contact Name 3",
]


def secondary_contacts(lead: Lead, main: Optional[MobileNumber]) -> List[MobileNumber]:
    """Every contact except the main one, in list order, padded to two."""
    others = [contact for contact in lead.mobile_numbers if contact is not main]
    while len(others) < 2:
        others.append(MobileNumber(number="", name=""))
    return others


def lead_to_row(lead: Lead) -> List[str]:
    flagged = lead.main_contact()
    second, third = secondary_contacts(lead, flagged)[:2]
    main = flagged
    if main is None or not main.number:
        main = MobileNumber(number=lead.mobile_number, name=main.name if main else "")

    address = lead.company_location or extract_address(lead.notes)[0]

    return [
        lead.consumer_number,
        lead.kva,
        lead.connection_date,
        lead.company,
        lead.client_name,
        lead.discom,
        lead.gidc,
        lead.gst_number,
        format_contact(main),
        lead.status.value,
        lead.notes,
        address,
        lead.follow_up_date,
        second.number,
        second.name,
        third.number,
        third.name,
    ]


def export_rows(leads: Iterable[Lead]) -> List[List[str]]:
    """Header row followed by one row per lead."""
    return [list(EXPORT_HEADERS)] + [lead_to_row(lead) for lead in leads]


def export_csv(leads: Iterable[Lead]) -> str:
    output = io.StringIO()
    writer = csv.writer(output)
    writer.writerows(export_rows(leads))
    return output.getvalue()


def export_xlsx(leads: Iterable[Lead]) -> bytes:
    wb = Workbook()
    ws = wb.active
    ws.title = "Leads"

    rows = export_rows(leads)
    for row in rows:
        ws.append(row)

    for col_idx, header in enumerate(EXPORT_HEADERS, 1):
        ws.cell(row=1, column=col_idx).font = Font(bold=True)
        width = max(len(str(row[col_idx - 1])) for row in rows)
        ws.column_dimensions[get_column_letter(col_idx)].width = min(width + 2, 50)

    output = io.BytesIO()
    wb.save(output)
    return output.getvalue()
