"""
Tests for export and the export/re-import round trip.
"""
import csv
import io

from openpyxl import load_workbook

from conftest import contact, make_lead
from leadtracker.ingestion.importer import LeadImporter
from leadtracker.ingestion.tabular import iter_table_rows
from leadtracker.repositories.lead_repo import LeadRepository
from leadtracker.repositories.store import InMemoryStore
from leadtracker.services.export_service import (
    EXPORT_HEADERS, export_csv, export_rows, export_xlsx, lead_to_row,
)

SOURCE = "\n".join([
    "con.no,KVA,Connection Date,Company Name,Client Name,Discom,GIDC,GST Number,Mo.No,"
    "Lead Status,Notes,Next Follow-up Date,Mobile Number 3",
    '1001,150,2023-12-01,Shree Polymers,Raj Patel,DGVCL,Vapi,24AAACS1234F1Z5,'
    '"9876543210, 9123456780 (Meena)",Hot Lead,"Wants quote | Address: Plot 12, GIDC Vapi",20/01/2024,9000000003',
    "0042,75,,Om Textiles,,MGVCL,,,9000000001,Deal Close,,,",
    "1003,200,,,Amit,UGVCL,,,,,,,",
]) + "\n"

IDENTITY_FIELDS = (
    "consumer_number", "kva", "connection_date", "company", "client_name", "discom",
    "gidc", "gst_number", "company_location", "status", "follow_up_date", "notes",
    "mobile_number",
)


def import_into_fresh_repo(content: bytes, filename: str) -> LeadRepository:
    repo = LeadRepository(InMemoryStore())
    LeadImporter(repo).process(iter_table_rows(content, filename))
    return repo


def snapshot(lead):
    fields = {field: getattr(lead, field) for field in IDENTITY_FIELDS}
    fields["contacts"] = [(c.id, c.number, c.name, c.is_main) for c in lead.mobile_numbers]
    return fields


def test_header_contract():
    assert len(EXPORT_HEADERS) == 17
    assert EXPORT_HEADERS[0] == "con.no"
    assert EXPORT_HEADERS[8] == "Main Mobile Number"
    assert export_rows([])[0] == EXPORT_HEADERS


def test_lead_to_row():
    lead = make_lead(
        company_location="Vapi",
        mobile_numbers=[
            contact("9876543210", "Raj Patel", is_main=True),
            contact("", "Meena", id="2"),
            contact("9000000003", "", id="3"),
        ],
    )
    row = dict(zip(EXPORT_HEADERS, lead_to_row(lead)))
    assert row["Main Mobile Number"] == "9876543210 (Raj Patel)"
    assert row["Lead Status"] == "New"
    assert row["Address"] == "Vapi"
    assert (row["Mobile Number 2"], row["Contact Name 2"]) == ("", "Meena")
    assert (row["Mobile Number 3"], row["Contact Name 3"]) == ("9000000003", "")


def test_address_column_falls_back_to_notes():
    lead = make_lead(notes="Address: Plot 9 | call later")
    assert dict(zip(EXPORT_HEADERS, lead_to_row(lead)))["Address"] == "Plot 9"


def test_csv_export_is_readable():
    lead = make_lead(company="Shree, Polymers")
    rows = list(csv.reader(io.StringIO(export_csv([lead]))))
    assert rows[0] == EXPORT_HEADERS
    assert rows[1][3] == "Shree, Polymers"


def test_xlsx_export():
    workbook = load_workbook(io.BytesIO(export_xlsx([make_lead()])))
    sheet = workbook.active
    assert sheet.title == "Leads"
    assert [cell.value for cell in sheet[1]] == EXPORT_HEADERS
    assert sheet["A2"].value == "31245007891"
    assert sheet["A1"].font.bold


def test_csv_round_trip_preserves_identity_and_contacts():
    original = import_into_fresh_repo(SOURCE.encode("utf-8"), "source.csv").list()
    assert len(original) == 3

    exported = export_csv(original).encode("utf-8")
    reimported = import_into_fresh_repo(exported, "export.csv").list()

    assert [snapshot(lead) for lead in reimported] == [snapshot(lead) for lead in original]


def test_xlsx_round_trip_preserves_identity_and_contacts():
    original = import_into_fresh_repo(SOURCE.encode("utf-8"), "source.csv").list()

    reimported = import_into_fresh_repo(export_xlsx(original), "export.xlsx").list()

    assert [snapshot(lead) for lead in reimported] == [snapshot(lead) for lead in original]


def test_round_trip_source_was_parsed_as_expected():
    first = import_into_fresh_repo(SOURCE.encode("utf-8"), "source.csv").list()[0]
    assert first.company_location == "Plot 12, GIDC Vapi"
    assert first.notes == "Wants quote"
    assert first.follow_up_date == "20-01-2024"
    assert [(c.number, c.name) for c in first.mobile_numbers] == [
        ("9876543210", "Raj Patel"),
        ("9123456780", "Meena"),
        ("9000000003", ""),
    ]


def test_main_contact_not_first_is_exported_once():
    lead = make_lead(mobile_numbers=[
        contact("1111111111", "A", id="1"),
        contact("2222222222", "B", is_main=True, id="2"),
    ])
    row = dict(zip(EXPORT_HEADERS, lead_to_row(lead)))
    assert row["Main Mobile Number"] == "2222222222 (B)"
    assert (row["Mobile Number 2"], row["Contact Name 2"]) == ("1111111111", "A")
    assert (row["Mobile Number 3"], row["Contact Name 3"]) == ("", "")


def test_round_trip_keeps_every_contact_when_main_is_not_first():
    lead = make_lead(mobile_numbers=[
        contact("1111111111", "A", id="1"),
        contact("2222222222", "B", is_main=True, id="2"),
        contact("3333333333", "C", id="3"),
    ])

    reimported = import_into_fresh_repo(export_csv([lead]).encode("utf-8"), "export.csv").list()[0]

    assert [(c.number, c.name, c.is_main) for c in reimported.mobile_numbers] == [
        ("2222222222", "B", True),
        ("1111111111", "A", False),
        ("3333333333", "C", False),
    ]
    assert reimported.mobile_number == "2222222222"
